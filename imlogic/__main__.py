import os

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "imlogic.api:app",
        host=os.getenv("IMLOGIC_HOST", "127.0.0.1"),
        port=int(os.getenv("IMLOGIC_PORT", "8000")),
        log_level="info",
    )
