from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BLOCKLIST_PATH = "data/blocklist.txt"


class Settings(BaseSettings):
    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================
    environment: str = "dev"  # "dev", "prod"

    # ==========================================================================
    # BLOCKLIST
    # ==========================================================================
    blocklist_path: str = DEFAULT_BLOCKLIST_PATH

    # ==========================================================================
    # SCORE THRESHOLDS (sum of rule weights)
    # ==========================================================================
    malicious_threshold: int = 70  # Score >= this = malicious
    suspicious_threshold: int = 30  # Score >= this = suspicious (below = benign)

    # ==========================================================================
    # INPUT / CONCURRENCY
    # ==========================================================================
    max_line_length: int = 1024 * 1024  # Longest accepted line in a URL list
    workers: int = 4  # Threads used for batch evaluation

    # ==========================================================================
    # LOGGING
    # ==========================================================================
    verbose: bool = False
    log_json: bool = False
    log_file: str = ""  # Extra JSON log file, empty for stderr only

    # ==========================================================================
    # API SECURITY
    # ==========================================================================
    api_token: str = ""  # Required for /admin routes when set
    api_token_header: str = "X-API-Key"

    model_config = SettingsConfigDict(
        env_prefix="URWARDEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_thresholds(self) -> "Settings":
        if self.suspicious_threshold < 0 or self.malicious_threshold < 0:
            raise ValueError("score thresholds must be non-negative")
        if self.suspicious_threshold > self.malicious_threshold:
            raise ValueError(
                f"suspicious_threshold ({self.suspicious_threshold}) must not exceed "
                f"malicious_threshold ({self.malicious_threshold})"
            )
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        return self

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "prod"

    @property
    def resolved_blocklist_path(self) -> str:
        return self.blocklist_path.strip() or DEFAULT_BLOCKLIST_PATH
