from dataclasses import dataclass

DEFAULT_MODE = "default"
COMMIT_MODE = "commit mode"


@dataclass(frozen=True)
class ChatTurn:
    """One recorded prompt/answer exchange."""

    mode: str
    prompt: str
    answer: str

    def to_dict(self) -> dict:
        return {"mode": self.mode, "prompt": self.prompt, "answer": self.answer}
