from textual.message import Message

class StatusUpdate(Message):
    """A message to update the status bar."""
    def __init__(self, text: str, error: bool = False) -> None:
        self.text = text
        self.error = error
        super().__init__()
