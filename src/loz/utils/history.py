import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from ..models.chat_turn import ChatTurn

logger = logging.getLogger(__name__)


def history_file_name(moment: datetime) -> str:
    """``YYYY-M-D-H-M-S.json``, without zero padding."""
    return f"{moment.year}-{moment.month}-{moment.day}-{moment.hour}-{moment.minute}-{moment.second}.json"


class HistoryLog:
    """Append-only record of the prompt/answer pairs of one run.

    Turns are only ever appended; the whole log is written once, at shutdown.
    """

    def __init__(self, log_dir: Path, clock: Callable[[], datetime] = datetime.now):
        self.log_dir = Path(log_dir)
        self._clock = clock
        self._turns: list[ChatTurn] = []

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return tuple(self._turns)

    def append(self, turn: ChatTurn) -> None:
        self._turns.append(turn)
        logger.debug(f"Recorded turn #{len(self._turns)} (mode={turn.mode})")

    def __len__(self) -> int:
        return len(self._turns)

    def save(self) -> Path:
        """Write the log to a timestamped JSON file and return its path."""
        moment = self._clock()
        self.log_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.log_dir / history_file_name(moment)
        payload = {
            "date": moment.isoformat(),
            "dialogue": [turn.to_dict() for turn in self._turns],
        }
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved {len(self._turns)} turns to {file_path}")
        return file_path
