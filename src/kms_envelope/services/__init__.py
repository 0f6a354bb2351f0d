from .asymmetric import AsymmetricOperations

__all__ = ["AsymmetricOperations"]
