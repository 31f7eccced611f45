"""HTTP API (FastAPI).

Usage:
    party-optimizer-serve

    Or build an application around a custom analyzer:
        from party_optimizer.api.app import create_app
        app = create_app(analyzer)
"""
