from astra.models.blueprint import Blueprint

__all__ = ["Blueprint"]
