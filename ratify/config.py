"""Configuration management"""
import re
from typing import List, Optional, Tuple
from pydantic_settings import BaseSettings, SettingsConfigDict

PIN_PATTERN = re.compile(r"[0-9]{4,12}")


class Settings(BaseSettings):
    # Storage
    data_file: str = "data/ratify.json"

    # Roster bootstrap, "Name:PIN,Name:PIN"
    seed_members: str = ""

    # Auth
    admin_code: Optional[str] = None
    max_pin_failures: int = 5
    lockout_minutes: int = 15
    session_ttl_min: int = 30
    prune_interval_seconds: int = 60
    pin_hash_iterations: int = 200000

    # HTTP
    frontend_origin: str = "*"
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def seed_roster(self) -> List[Tuple[str, str]]:
        """Parse seed members from comma-separated Name:PIN pairs"""
        roster = []
        for entry in self.seed_members.split(","):
            if not entry.strip():
                continue
            name, sep, pin = entry.partition(":")
            if not sep or not name.strip() or not pin.strip():
                raise ValueError(f"SEED_MEMBERS entry must look like Name:PIN, got {entry.strip()!r}")
            pin = pin.strip()
            if not PIN_PATTERN.fullmatch(pin):
                raise ValueError(f"SEED_MEMBERS PIN for {name.strip()!r} must be 4-12 digits")
            roster.append((name.strip(), pin))
        return roster

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_min * 60

    @property
    def lockout_seconds(self) -> int:
        return self.lockout_minutes * 60


settings = Settings()
