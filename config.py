"""Configuration management for the budget report.

Reads configuration from ~/.config/budget-report.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    default_budget: str
    default_period: str
    subtotal_by: str
    subtotal_parents: bool

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "budget-report"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="budget-report.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            default_budget="Budget",
            default_period="automatic",
            subtotal_by="none",
            subtotal_parents=True,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "budget-report.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return parse_config(data)


def parse_config(data: dict) -> Config:
    """Build a Config from parsed TOML data, filling in defaults.

    Args:
        data: Dictionary as returned by tomllib.

    Returns:
        Config object.
    """
    defaults = Config.default()
    base_dir = Path(data.get("base_dir", defaults.base_dir))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", defaults.db_filename)

    log_config = data.get("logging", {})
    log_level = log_config.get("level", defaults.log_level)
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    report_config = data.get("report", {})
    default_budget = report_config.get("budget", defaults.default_budget)
    default_period = report_config.get("period", defaults.default_period)
    subtotal_by = report_config.get("subtotal_by", defaults.subtotal_by)
    subtotal_parents = report_config.get(
        "subtotal_parents", defaults.subtotal_parents
    )

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        default_budget=default_budget,
        default_period=default_period,
        subtotal_by=subtotal_by,
        subtotal_parents=subtotal_parents,
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "report": {
            "budget": config.default_budget,
            "period": config.default_period,
            "subtotal_by": config.subtotal_by,
            "subtotal_parents": config.subtotal_parents,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
