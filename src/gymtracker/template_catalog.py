"""
Workout template catalog.

Template documents look like:

    ---
    name: Pull-A
    type: pull
    ---

    ## Exercises

    | Exercise | Sets | Reps |
    |----------|------|------|
    | [[barbell-row]] | 4 | 6-8 |
"""
import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from .document import parse_document, render_header
from .model import TemplateExercise, WorkoutTemplate
from .settings import Settings
from .tables import parse_exercise_rows, render_table
from .vault import FolderContents, Vault, ensure_folder, join_path, stem

logger = logging.getLogger(__name__)

# Templates are filled in by hand, so blank cells fall back to a usable prescription
DEFAULT_SETS = 3
DEFAULT_REPS = "8-12"


class TemplateCatalog:

    def __init__(self, vault: Vault, settings: Settings):
        self.vault = vault
        self.settings = settings
        self.cache: Dict[str, WorkoutTemplate] = {}

    def load_all(self) -> Dict[str, WorkoutTemplate]:
        self.cache.clear()

        listing = self.vault.list_documents(self.settings.templates_folder)
        if not isinstance(listing, FolderContents):
            return self.cache

        for path in listing.documents:
            template = self.parse_content(self.vault.read_document(path), stem(path))
            if template is None:
                logger.warning("Skipping unrecognized template document: %s", path)
                continue
            self.cache[template.id] = template

        return self.cache

    def parse_content(self, content: str, template_id: str) -> Optional[WorkoutTemplate]:
        parsed = parse_document(content)
        if parsed is None:
            return None

        header, body = parsed
        rows = parse_exercise_rows(body, sets_default=DEFAULT_SETS, reps_default=DEFAULT_REPS)

        try:
            return WorkoutTemplate(
                id=template_id,
                name=str(header.get("name") or template_id),
                type=str(header.get("type") or ""),
                exercises=[TemplateExercise(**row) for row in rows],
            )
        except ValidationError as e:
            logger.warning("Invalid template document %s: %s", template_id, e)
            return None

    def generate_content(self, template: WorkoutTemplate) -> str:
        header = render_header({"name": template.name, "type": template.type})
        table = render_table(
            ["Exercise", "Sets", "Reps"],
            [[f"[[{e.exercise_id}]]", str(e.sets), e.reps] for e in template.exercises],
        )
        return f"{header}\n## Exercises\n\n{table}"

    def document_path(self, template_id: str) -> str:
        return join_path(self.settings.templates_folder, f"{template_id}.md")

    def create(self, template: WorkoutTemplate) -> str:
        """Write the template document, overwriting an existing one, and cache it."""
        ensure_folder(self.vault, self.settings.templates_folder)

        path = self.document_path(template.id)
        self.vault.write_document(path, self.generate_content(template))
        self.cache[template.id] = template
        return path

    def delete(self, template_id: str) -> None:
        path = self.document_path(template_id)
        if self.vault.document_exists(path):
            self.vault.delete_document(path)
        self.cache.pop(template_id, None)

    def get_by_id(self, template_id: str) -> Optional[WorkoutTemplate]:
        return self.cache.get(template_id)

    def get_all(self) -> List[WorkoutTemplate]:
        return list(self.cache.values())

    def get_by_type(self, workout_type: str) -> List[WorkoutTemplate]:
        return [t for t in self.get_all() if t.type == workout_type]
