# smartstore/dependencies.py

from fastapi import Request

from smartstore.store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store
