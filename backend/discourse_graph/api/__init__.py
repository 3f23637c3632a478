from discourse_graph.api.routes import router

__all__ = ["router"]
