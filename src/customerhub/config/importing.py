"""Batch import defaults."""

from __future__ import annotations

from dataclasses import dataclass

from customerhub.domain.import_pipeline import ImportDefaults
from customerhub.domain.import_pipeline.batch import DEFAULT_IMPORTED_CITY, DEFAULT_IMPORTED_STATE

from .env import optional_env_var


@dataclass(frozen=True, slots=True)
class ImportConfig:
    placeholder_city: str = DEFAULT_IMPORTED_CITY
    placeholder_state: str = DEFAULT_IMPORTED_STATE

    def defaults(self) -> ImportDefaults:
        return ImportDefaults(city=self.placeholder_city, state=self.placeholder_state)


def get_import_config() -> ImportConfig:
    return ImportConfig(
        placeholder_city=optional_env_var("CUSTOMERHUB_IMPORT_CITY", DEFAULT_IMPORTED_CITY),
        placeholder_state=optional_env_var("CUSTOMERHUB_IMPORT_STATE", DEFAULT_IMPORTED_STATE),
    )
