"""API dependencies.

Process-wide state is built once in the application lifespan
(:func:`app.main.init_state`) and attached to ``app.state``. These
dependencies hand it to the routers, and tests can replace any of them
through ``app.dependency_overrides``.
"""
import random
from typing import Any, Dict, List

from fastapi import Request

from app.utils.auth import UserDirectory
from app.utils.estimation import EstimationProvider


def get_ledger_store(request: Request):
    """Ledger store (memory or database backend)"""
    return request.app.state.ledger_store


def get_estimator(request: Request) -> EstimationProvider:
    return request.app.state.estimator


def get_history(request: Request) -> List[Dict[str, Any]]:
    """Every recommendation served since startup"""
    return request.app.state.recommendation_history


def get_users(request: Request) -> UserDirectory:
    return request.app.state.users


def get_rng(request: Request) -> random.Random:
    """Random source for the mock market and sensor feeds"""
    return request.app.state.rng
