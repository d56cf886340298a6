"""Service modules"""
from .portfolio import PortfolioService

__all__ = ["PortfolioService"]
