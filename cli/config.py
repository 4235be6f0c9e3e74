"""
CLI Configuration Management
"""

import os
import json
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any
from urllib.parse import urlparse, urlunparse


@dataclass
class CLIConfig:
    """Configuration for the campus-portal terminal client"""

    # Server
    server_url: str = "http://localhost:5000"
    timeout: int = 30

    # Authentication (populated after login)
    auth_token: Optional[str] = None
    user_id: Optional[str] = None
    university_id: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None

    # Output settings
    verbose: bool = False

    # Paths
    config_dir: str = field(default_factory=lambda: str(Path.home() / ".campus_portal"))

    @property
    def config_path(self) -> Path:
        return Path(self.config_dir) / "config.json"

    @property
    def api_base_url(self) -> str:
        return f"{self.server_url.rstrip('/')}/api"

    @property
    def ws_url(self) -> str:
        """Realtime endpoint derived from the server URL (http→ws, https→wss)"""
        parsed = urlparse(self.server_url.rstrip("/"))
        scheme = "wss" if parsed.scheme == "https" else "ws"
        return urlunparse((scheme, parsed.netloc, f"{parsed.path}/ws", "", "", ""))

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)

    def load_from_file(self, config_path: str) -> None:
        """Load configuration from JSON file"""
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                data = json.load(f)
                for key, value in data.items():
                    if hasattr(self, key):
                        setattr(self, key, value)

    def save_to_file(self, config_path: Optional[str] = None) -> None:
        """Save configuration to JSON file (readable by the owner only)"""
        path = Path(config_path) if config_path else self.config_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(asdict(self), f, indent=2)
        try:
            os.chmod(path, 0o600)
        except OSError:
            pass

    def set_auth(self, token: str, user: Dict[str, Any]) -> None:
        self.auth_token = token
        self.user_id = user.get("id")
        self.university_id = user.get("universityId")
        self.full_name = user.get("fullName")
        self.role = user.get("role")

    def clear_auth(self) -> None:
        self.auth_token = None
        self.user_id = None
        self.university_id = None
        self.full_name = None
        self.role = None

    @classmethod
    def load_default(cls, config_dir: Optional[str] = None) -> "CLIConfig":
        """Load default configuration from user config directory"""
        config = cls(config_dir=config_dir) if config_dir else cls()
        if config.config_path.exists():
            config.load_from_file(str(config.config_path))

        # Override with environment variables
        config._load_from_env()

        return config

    def _load_from_env(self) -> None:
        """Load configuration from environment variables"""
        env_mappings = {
            "CAMPUS_PORTAL_URL": "server_url",
            "CAMPUS_PORTAL_TOKEN": "auth_token",
            "CAMPUS_PORTAL_TIMEOUT": ("timeout", int),
            "CAMPUS_PORTAL_VERBOSE": ("verbose", lambda x: x.lower() == "true"),
        }

        for env_var, mapping in env_mappings.items():
            value = os.environ.get(env_var)
            if value:
                if isinstance(mapping, tuple):
                    attr, converter = mapping
                    setattr(self, attr, converter(value))
                else:
                    setattr(self, mapping, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return asdict(self)
