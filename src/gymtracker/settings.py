"""
Plugin settings, loaded from the environment (and an optional .env file).
"""
import os
from typing import List, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "GYM_TRACKER_"

DEFAULT_WORKOUT_TYPES = ["push", "pull", "legs", "upper", "lower", "full-body"]


class Settings(BaseModel):
    vault_path: str = "."
    workouts_folder: str = "Workouts"
    exercises_folder: str = "Workouts/Exercises"
    templates_folder: str = "Workouts/Templates"
    workout_types: List[str] = Field(default_factory=lambda: list(DEFAULT_WORKOUT_TYPES))
    weight_unit: Literal["kg", "lbs"] = "lbs"
    track_effort: bool = True
    effort_metric: Literal["rpe", "rir"] = "rpe"
    seeded: bool = False

    @property
    def effort_label(self) -> str:
        return self.effort_metric.upper()


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(**overrides) -> Settings:
    """
    Build Settings from GYM_TRACKER_* environment variables.

    Keyword overrides win over the environment. List settings are
    comma-separated, booleans accept true/1/yes/on.
    """
    load_dotenv()

    values = {}
    for name, field in Settings.model_fields.items():
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is None:
            continue
        if field.annotation is bool:
            values[name] = _parse_bool(raw)
        elif name == "workout_types":
            values[name] = [t.strip() for t in raw.split(",") if t.strip()]
        else:
            values[name] = raw

    values.update(overrides)
    return Settings(**values)
