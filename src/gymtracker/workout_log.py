"""
Workout log parser/generator.

A logged session is one document per day and type, e.g. Workouts/2026-01-20-push.md:

    ---
    date: 2026-01-20
    type: push
    duration: 65
    ---

    ## Exercises

    ### [[barbell-bench-press]]
    | Set | Weight (lbs) | Reps | RPE |
    |-----|--------------|------|-----|
    | 1 | 185 | 8 | 7.5 |
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from .document import parse_document, render_header, split_sections
from .model import LastPerformance, ProgressionPoint, Workout, WorkoutExercise, WorkoutSet
from .settings import Settings
from .tables import extract_exercise_id, format_number, parse_float, parse_int, read_table, render_table
from .vault import FolderContents, Vault, basename, ensure_folder, join_path

logger = logging.getLogger(__name__)

MAX_PARALLEL_FETCHES = 8


def is_program_document(path: str) -> bool:
    name = basename(path)
    return name == "program.md" or name.endswith(".program.md")


def workout_filename(workout: Workout) -> str:
    return f"{workout.date}-{workout.type}.md"


def set_table_headers(settings: Settings) -> List[str]:
    """Set table header row; the parser reads columns by position, so labels are free text."""
    headers = ["Set", f"Weight ({settings.weight_unit})", "Reps"]
    if settings.track_effort:
        headers.append(settings.effort_label)
    return headers


def find_exercise(workout: Workout, exercise_id: str) -> Optional[WorkoutExercise]:
    for exercise in workout.exercises:
        if exercise.exercise_id == exercise_id:
            return exercise
    return None


class WorkoutLog:
    """Reads and writes logged workout sessions in the workouts folder"""

    def __init__(self, vault: Vault, settings: Settings):
        self.vault = vault
        self.settings = settings

    def parse_content(self, content: str) -> Optional[Workout]:
        parsed = parse_document(content)
        if parsed is None:
            return None

        header, body = parsed
        if not header.get("date") or not header.get("type"):
            return None

        duration = header.get("duration")
        if duration is not None and not isinstance(duration, int):
            duration = parse_int(str(duration), None)

        try:
            return Workout(
                date=str(header["date"]),
                type=str(header["type"]),
                duration=duration,
                exercises=self._parse_exercise_sections(body),
                notes=str(header["notes"]) if header.get("notes") else None,
            )
        except ValidationError as e:
            logger.warning("Invalid workout document: %s", e)
            return None

    def _parse_exercise_sections(self, body: str) -> List[WorkoutExercise]:
        exercises = []
        for heading, text in split_sections(body, level=3):
            exercise_id = extract_exercise_id(heading)
            if not exercise_id:
                continue
            sets = self._parse_set_table(text)
            if sets:
                exercises.append(WorkoutExercise(exercise_id=exercise_id, sets=sets))
        return exercises

    def _parse_set_table(self, text: str) -> List[WorkoutSet]:
        """Rows are Set | Weight | Reps | [effort]; the set number is ignored."""
        table = read_table(text)
        if table is None:
            return []

        _header, rows = table
        sets = []
        for cells in rows:
            if len(cells) < 3:
                continue
            workout_set = WorkoutSet(
                weight=parse_float(cells[1], 0.0),
                reps=parse_int(cells[2], 0),
                effort=parse_float(cells[3], None) if len(cells) > 3 else None,
            )
            if not workout_set.is_empty():
                sets.append(workout_set)
        return sets

    def generate_content(self, workout: Workout) -> str:
        header = render_header({
            "date": workout.date,
            "type": workout.type,
            "duration": workout.duration or None,
            "notes": workout.notes or None,
        })

        content = f"{header}\n## Exercises\n\n"
        for exercise in workout.exercises:
            sets = [s for s in exercise.sets if not s.is_empty()]
            if not sets:
                continue
            content += f"### [[{exercise.exercise_id}]]\n"
            content += self._generate_set_table(sets)
            content += "\n"
        return content

    def _generate_set_table(self, sets: List[WorkoutSet]) -> str:
        rows = []
        for index, workout_set in enumerate(sets, start=1):
            row = [str(index), format_number(workout_set.weight), str(workout_set.reps)]
            if self.settings.track_effort:
                row.append(format_number(workout_set.effort) if workout_set.effort is not None else "")
            rows.append(row)
        return render_table(set_table_headers(self.settings), rows)

    def save(self, workout: Workout) -> str:
        """Write the workout to {date}-{type}.md, replacing a same-day document. Returns its path."""
        ensure_folder(self.vault, self.settings.workouts_folder)

        cleaned = workout.model_copy(update={
            "exercises": [
                e.model_copy(update={"sets": [s for s in e.sets if not s.is_empty()]})
                for e in workout.exercises
            ]
        })

        path = join_path(self.settings.workouts_folder, workout_filename(workout))
        if self.vault.document_exists(path):
            logger.info("Overwriting existing workout %s", path)
        self.vault.write_document(path, self.generate_content(cleaned))
        return path

    def load_all_workouts(self) -> List[Workout]:
        """All parseable workouts, most recent first."""
        listing = self.vault.list_documents(self.settings.workouts_folder)
        if not isinstance(listing, FolderContents):
            return []

        workouts = []
        for path in listing.documents:
            if is_program_document(path):
                continue
            workout = self.parse_content(self.vault.read_document(path))
            if workout is None:
                logger.debug("Skipping non-workout document %s", path)
                continue
            workouts.append(workout)

        # ISO dates sort correctly as strings
        workouts.sort(key=lambda w: w.date, reverse=True)
        return workouts

    def get_exercise_progression(self, exercise_id: str) -> List[ProgressionPoint]:
        """Per-session max weight, max reps and volume for one exercise, oldest first."""
        progression = []
        for workout in self.load_all_workouts():
            exercise = find_exercise(workout, exercise_id)
            if exercise is None or not exercise.sets:
                continue
            progression.append(ProgressionPoint(
                date=workout.date,
                max_weight=max(s.weight for s in exercise.sets),
                max_reps=max(s.reps for s in exercise.sets),
                total_volume=sum(s.weight * s.reps for s in exercise.sets),
            ))

        progression.sort(key=lambda p: p.date)
        return progression

    def get_last_session(self, exercise_id: str) -> Optional[LastPerformance]:
        for workout in self.load_all_workouts():
            exercise = find_exercise(workout, exercise_id)
            if exercise is not None and exercise.sets:
                return LastPerformance(date=workout.date, sets=exercise.sets)
        return None

    def get_last_sessions(self, exercise_ids: Iterable[str]) -> Dict[str, Optional[LastPerformance]]:
        """
        Fetch the last session of several exercises in parallel.

        A failed lookup is logged and reported as None for that exercise
        without affecting the others.
        """
        ids = list(dict.fromkeys(exercise_ids))
        if not ids:
            return {}

        results: Dict[str, Optional[LastPerformance]] = {}
        with ThreadPoolExecutor(max_workers=min(MAX_PARALLEL_FETCHES, len(ids))) as executor:
            futures = {exercise_id: executor.submit(self.get_last_session, exercise_id) for exercise_id in ids}
            for exercise_id, future in futures.items():
                try:
                    results[exercise_id] = future.result()
                except Exception:
                    logger.exception("Failed to load last session for %s", exercise_id)
                    results[exercise_id] = None
        return results
