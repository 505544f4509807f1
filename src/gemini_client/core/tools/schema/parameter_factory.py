import inspect
from typing import Annotated, Any, NamedTuple, NoReturn, get_args, get_origin

from pydantic import Field
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_UNSUPPORTED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class DeclarationField(NamedTuple):
    """One property of a function declaration, in ``create_model`` field form."""

    annotation: Any
    field: FieldInfo


class DeclarationParameterFactory:
    """Turns the parameters of an annotated function into declaration properties.

    The model only sees the declaration, so every parameter must be named,
    typed and described:

        def get_current_weather(
            location: Annotated[str, Field(description="The city and state")],
            unit: Annotated[str, Field(description="celsius or fahrenheit")] = "celsius",
        ) -> dict: ...
    """

    @classmethod
    def declaration_field(cls, param: inspect.Parameter, function_name: str) -> DeclarationField:
        """Build the declaration property for ``param``.

        A parameter with a default becomes optional in the declaration.

        Raises:
            ToolValidationError: For ``*args``/``**kwargs`` or a parameter without description.
        """
        if param.kind in _UNSUPPORTED_KINDS:
            cls._reject(f"Function '{function_name}' cannot declare variadic parameter '{param.name}'.")

        description = cls._description(param, function_name)
        default = ... if param.default is inspect.Parameter.empty else param.default
        return DeclarationField(annotation=param.annotation, field=Field(default=default, description=description))

    @classmethod
    def _description(cls, param: inspect.Parameter, function_name: str) -> str:
        if get_origin(param.annotation) is Annotated:
            for metadata in get_args(param.annotation)[1:]:
                if isinstance(metadata, FieldInfo) and metadata.description:
                    return metadata.description

        cls._reject(
            f"Parameter '{param.name}' of function '{function_name}' is missing a description.\n"
            f"Declare it as {param.name}: Annotated[Type, Field(description='...')]"
        )

    @staticmethod
    def _reject(msg: str) -> NoReturn:
        logger.error(msg)
        raise ToolValidationError(msg)
