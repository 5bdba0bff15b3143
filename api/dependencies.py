# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: dependencies.py
# -----------------------------------------------------------------------------
from fastapi import Request

from services.HealthService import HealthService
from services.ProductService import ProductService


def get_product_service(request: Request) -> ProductService:
    # use the singleton service from the app's container
    return request.app.state.container.product_service

def get_health_service(request: Request) -> HealthService:
    # use the singleton service from the app's container
    return request.app.state.container.health_service
