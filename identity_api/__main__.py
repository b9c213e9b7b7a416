import uvicorn

from identity_api.config import settings

def run() -> None:
    uvicorn.run("identity_api.main:app", host=settings.app_host, port=settings.app_port)

if __name__ == "__main__":
    run()
