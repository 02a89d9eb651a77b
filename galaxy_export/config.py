import os


def _env(key, default, cast=str):
    value = os.environ.get(key)
    if value is None or value == "":
        return default
    return cast(value)


def optional_int(value):
    number = int(value)
    return number if number > 0 else None


class Settings:
    SYSTEM_PATH = _env("GALAXY_EXPORT_SYSTEM_PATH", "/system")
    OUTPUT_FILE = _env("GALAXY_EXPORT_OUTPUT", "galaxy.json")
    FETCH_TIMEOUT: float = _env("GALAXY_EXPORT_TIMEOUT", 10.0, float)  # 0 waits forever
    MAX_CONCURRENCY = _env("GALAXY_EXPORT_CONCURRENCY", None, optional_int)
    LOG_LEVEL = _env("GALAXY_EXPORT_LOG_LEVEL", "INFO")
    OUTPUT_MODE = 0o644
    NODE_PORT: int = _env("GALAXY_NODE_PORT", 8080, int)


settings = Settings()
