from jwt_redirect.api.v1.generate import router as generate_router

__all__ = ["generate_router"]
