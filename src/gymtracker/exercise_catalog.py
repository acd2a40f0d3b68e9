"""
Exercise catalog: one markdown document per exercise in the exercises folder.
"""
import logging
from typing import Dict, List, Optional, Tuple

from fuzzywuzzy import fuzz, process
from pydantic import ValidationError

from .document import parse_document, render_header
from .model import Exercise, ExerciseType, Muscles
from .settings import Settings
from .vault import FolderContents, Vault, ensure_folder, join_path, stem

logger = logging.getLogger(__name__)


def _as_list(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


class ExerciseCatalog:
    """In-memory map of exercises, rebuilt from the vault on load_all()"""

    def __init__(self, vault: Vault, settings: Settings):
        self.vault = vault
        self.settings = settings
        self.cache: Dict[str, Exercise] = {}

    def load_all(self) -> Dict[str, Exercise]:
        self.cache.clear()

        listing = self.vault.list_documents(self.settings.exercises_folder)
        if not isinstance(listing, FolderContents):
            logger.debug("No exercises folder at %s", self.settings.exercises_folder)
            return self.cache

        for path in listing.documents:
            exercise = self.parse_content(self.vault.read_document(path), stem(path))
            if exercise is None:
                logger.warning("Skipping unrecognized exercise document: %s", path)
                continue
            self.cache[exercise.id] = exercise

        return self.cache

    def parse_content(self, content: str, fallback_id: str) -> Optional[Exercise]:
        """Parse an exercise document; the filename stem stands in for a missing id/name."""
        parsed = parse_document(content)
        if parsed is None:
            return None

        header, body = parsed
        muscles = header.get("muscles")
        if not isinstance(muscles, dict):
            muscles = {}

        try:
            return Exercise(
                id=str(header.get("id") or fallback_id),
                name=str(header.get("name") or fallback_id),
                muscles=Muscles(
                    primary=_as_list(muscles.get("primary")),
                    secondary=_as_list(muscles.get("secondary")),
                ),
                type=self._exercise_type(header.get("type"), fallback_id),
                equipment=str(header.get("equipment") or "other"),
                alternatives=_as_list(header.get("alternatives")),
                description=body.strip() or None,
            )
        except ValidationError as e:
            logger.warning("Invalid exercise document %s: %s", fallback_id, e)
            return None

    @staticmethod
    def _exercise_type(value, exercise_id: str) -> ExerciseType:
        if not value:
            return ExerciseType.isolation
        try:
            return ExerciseType(str(value).strip().lower())
        except ValueError:
            logger.warning("Unknown exercise type %r in %s, using isolation", value, exercise_id)
            return ExerciseType.isolation

    def generate_content(self, exercise: Exercise) -> str:
        header = render_header({
            "id": exercise.id,
            "name": exercise.name,
            "muscles": {
                "primary": exercise.muscles.primary,
                "secondary": exercise.muscles.secondary,
            },
            "type": exercise.type.value,
            "equipment": exercise.equipment,
            "alternatives": exercise.alternatives,
        })
        return f"{header}\n{exercise.description or ''}"

    def document_path(self, exercise_id: str) -> str:
        return join_path(self.settings.exercises_folder, f"{exercise_id}.md")

    def create(self, exercise: Exercise) -> str:
        """Write a new exercise document and add it to the cache. Returns its path."""
        ensure_folder(self.vault, self.settings.exercises_folder)

        path = self.document_path(exercise.id)
        self.vault.write_document(path, self.generate_content(exercise))
        self.cache[exercise.id] = exercise
        return path

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        return self.cache.get(exercise_id)

    def get_all(self) -> List[Exercise]:
        return list(self.cache.values())

    def get_all_by_muscle(self, muscle: str) -> List[Exercise]:
        return [
            e for e in self.get_all()
            if muscle in e.muscles.primary or muscle in e.muscles.secondary
        ]

    def search(self, query: str) -> List[Exercise]:
        """Case-insensitive substring search over name, id, primary muscles and equipment"""
        q = query.lower()
        return [
            e for e in self.get_all()
            if q in e.name.lower()
            or q in e.id.lower()
            or any(q in m.lower() for m in e.muscles.primary)
            or q in e.equipment.lower()
        ]

    def fuzzy_search(self, query: str, limit: int = 10,
                     score_cutoff: int = 60) -> List[Tuple[Exercise, int]]:
        """
        Rank exercises by fuzzy name similarity.

        Returns (exercise, score) pairs, best first, dropping scores below
        `score_cutoff`.
        """
        names = {e.id: e.name for e in self.get_all()}
        if not names or not query.strip():
            return []

        matches = process.extract(query, names, scorer=fuzz.token_sort_ratio, limit=limit)
        return [
            (self.cache[exercise_id], score)
            for _name, score, exercise_id in matches
            if score >= score_cutoff
        ]
