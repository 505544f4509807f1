from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..handlers import FunctionHandler
from ...types import FunctionDeclaration


class ToolDefinition(BaseModel):
    """
    A function registered for the model to call.

    Attributes:
        name: The unique name of the function.
        handler: The handler invoked when the model calls the function.
        declaration: The declaration sent to the model. ``None`` when the caller
                     declares the function in the request itself.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    handler: FunctionHandler
    declaration: Optional[FunctionDeclaration] = None
