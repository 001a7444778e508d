"""Checkpointed, resumable batches of named steps."""

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from ..errors import BatchStepError
from ..utils.logging import get_logger

logger = get_logger(__name__)

# A step receives the batch results and updates them in place
StepCallback = Callable[[dict[str, Any]], None]


@dataclass
class BatchStep:
    """A named unit of work."""

    name: str
    callback: StepCallback


@dataclass
class Batch:
    """An ordered sequence of uniquely named steps."""

    title: str
    steps: list[BatchStep] = field(default_factory=list)

    def add_step(self, name: str, callback: StepCallback) -> None:
        if any(step.name == name for step in self.steps):
            raise ValueError(f"Duplicate batch step: {name}")
        self.steps.append(BatchStep(name, callback))

    def __len__(self) -> int:
        return len(self.steps)


@dataclass
class BatchResult:
    """Outcome of running a batch."""

    title: str
    completed: list[str] = field(default_factory=list)
    resumed: list[str] = field(default_factory=list)
    results: dict[str, Any] = field(default_factory=dict)
    error: Optional[BatchStepError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchRunner:
    """Runs batches, checkpointing after every step.

    When a step fails, the checkpoint keeps the completed steps and the
    accumulated results; running the same batch again resumes after the
    last completed step. The checkpoint is removed once a batch finishes.
    """

    def __init__(self, checkpoint_path: str | Path):
        self.checkpoint_path = Path(checkpoint_path)

    def _load_checkpoint(self, title: str) -> dict[str, Any]:
        if not self.checkpoint_path.exists():
            return {"title": title, "completed": [], "results": {}}

        with open(self.checkpoint_path, encoding="utf-8") as f:
            checkpoint = json.load(f)

        if checkpoint.get("title") != title:
            logger.warning(
                f"Discarding checkpoint of unfinished batch '{checkpoint.get('title')}'"
            )
            return {"title": title, "completed": [], "results": {}}

        logger.info(
            f"Resuming batch '{title}' after {len(checkpoint['completed'])} completed steps"
        )
        return checkpoint

    def _save_checkpoint(self, checkpoint: dict[str, Any]) -> None:
        self.checkpoint_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.checkpoint_path, "w", encoding="utf-8") as f:
            json.dump(checkpoint, f, indent=2)

    def clear(self) -> None:
        self.checkpoint_path.unlink(missing_ok=True)

    def has_checkpoint(self) -> bool:
        return self.checkpoint_path.exists()

    def run(self, batch: Batch) -> BatchResult:
        """Run the steps of a batch that have not completed yet.

        Returns:
            BatchResult; a failed step is reported in ``error``
        """
        checkpoint = self._load_checkpoint(batch.title)
        done = set(checkpoint["completed"])
        result = BatchResult(
            title=batch.title,
            completed=list(checkpoint["completed"]),
            results=copy.deepcopy(checkpoint["results"]),
        )

        logger.info(f"Running batch '{batch.title}' ({len(batch)} steps)")

        for step in batch.steps:
            if step.name in done:
                result.resumed.append(step.name)
                continue

            logger.debug(f"Batch step: {step.name}")
            try:
                step.callback(result.results)
            except Exception as e:
                logger.error(f"Batch step '{step.name}' failed: {e}")
                result.error = BatchStepError(step.name, str(e))
                self._save_checkpoint(checkpoint)
                return result

            result.completed.append(step.name)
            checkpoint["completed"] = list(result.completed)
            checkpoint["results"] = copy.deepcopy(result.results)
            self._save_checkpoint(checkpoint)

        self.clear()
        logger.info(f"Batch '{batch.title}' finished")
        return result
