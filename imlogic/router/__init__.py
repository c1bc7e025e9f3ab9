from imlogic.router.logic_router import LogicRouter

__all__ = ["LogicRouter"]
