"""
TaskValet Result - Responses exchanged with the hosting environment
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class AskResponse(str, Enum):
    """How the user answered an ask() prompt"""
    YES_BUTTON_CLICKED = "yesButtonClicked"
    NO_BUTTON_CLICKED = "noButtonClicked"
    MESSAGE_RESPONSE = "messageResponse"


@dataclass
class AskResult:
    """
    Answer to a host ask() prompt

    Attributes:
        response: Which control the user used
        text: Free-form feedback typed by the user
        images: Attached images (data URLs)
    """
    response: AskResponse
    text: Optional[str] = None
    images: List[str] = field(default_factory=list)

    @property
    def approved(self) -> bool:
        return self.response == AskResponse.YES_BUTTON_CLICKED
