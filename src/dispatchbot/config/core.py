import logging
import os


class Core:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("dispatchbot", {})
        discord_cfg = cfg.get("discord", {})

        token_env = str(discord_cfg.get("token_env", "DISCORD_API_TOKEN"))
        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)

        level_name = str(cfg.get("log_level", os.getenv("LOG_LEVEL", "INFO"))).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown LOG_LEVEL: {level_name}")
        self.LOG_LEVEL: int = level
