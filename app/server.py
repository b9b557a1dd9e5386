import uvicorn
from dotenv import load_dotenv

from app.services.config import AppConfig


def main() -> None:
    load_dotenv()
    cfg = AppConfig.from_env()
    uvicorn.run(
        "app.main:app",
        host=cfg.host,
        port=cfg.port,
        proxy_headers=True,
        forwarded_allow_ips=cfg.forwarded_allow_ips,
        ssl_certfile=cfg.ssl_certfile,
        ssl_keyfile=cfg.ssl_keyfile,
    )


if __name__ == "__main__":
    main()
