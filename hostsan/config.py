"""Configuration loader for hostsan."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from hostsan.pipeline import FilterPolicy
from hostsan.utils.cache import DEFAULT_CACHE_DIR


@dataclass
class SuffixListConfig:
    sources: list[str] = field(default_factory=list)
    include_defaults: bool = True
    cache_dir: str = str(DEFAULT_CACHE_DIR)
    max_age_hours: int = 72

    @property
    def max_age(self) -> int:
        return self.max_age_hours * 3600


@dataclass
class HostsanConfig:
    suffix_lists: SuffixListConfig = field(default_factory=SuffixListConfig)
    filter: FilterPolicy = field(default_factory=FilterPolicy)

    @classmethod
    def from_yaml(cls, path: str) -> "HostsanConfig":
        """Load configuration from a YAML file.

        Example::

            suffix_lists:
              sources: [/etc/hostsan/internal.dat]
              include_defaults: true
              cache_dir: /var/cache/hostsan
              max_age_hours: 72
            filter:
              keep_ip: false
              keep_unknown_suffix: false
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        config = cls()

        if "suffix_lists" in data:
            sl = data["suffix_lists"] or {}
            config.suffix_lists = SuffixListConfig(
                sources=list(sl.get("sources") or []),
                include_defaults=bool(sl.get("include_defaults", True)),
                cache_dir=str(sl.get("cache_dir", DEFAULT_CACHE_DIR)),
                max_age_hours=int(sl.get("max_age_hours", 72)),
            )

        if "filter" in data:
            fl = data["filter"] or {}
            config.filter = FilterPolicy(
                keep_ip=bool(fl.get("keep_ip", False)),
                keep_unknown_suffix=bool(fl.get("keep_unknown_suffix", False)),
            )

        return config

    @classmethod
    def default(cls) -> "HostsanConfig":
        """Create a default configuration."""
        return cls()
