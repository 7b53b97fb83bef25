import os


class Http:
    def __init__(self, config: dict | None = None) -> None:
        http_cfg = (config or {}).get("dispatchbot", {}).get("http", {})
        enable_raw = http_cfg.get("enable_http", os.getenv("ENABLE_HTTP", "1"))
        self.ENABLE_HTTP: bool = str(enable_raw).lower() in ("1", "true", "yes")
        self.HTTP_HOST: str = str(http_cfg.get("host", os.getenv("HTTP_HOST", "0.0.0.0")))
        self.HTTP_PORT: int = int(http_cfg.get("port", os.getenv("HTTP_PORT", "8080")))
