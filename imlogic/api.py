from fastapi import FastAPI
from imlogic.router.logic_router import LogicRouter

app = FastAPI(title="imlogic", description="Constraint logic parsing, rendering and evaluation")
router = LogicRouter()
app.include_router(router)
