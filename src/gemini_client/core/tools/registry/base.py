"""Registry of the functions the model may call."""

import inspect
from typing import Any, Callable, Dict, Iterator, Optional, Union, cast

import jsonref  # type: ignore
from pydantic import create_model

from ..handlers import FunctionHandler, ToolFunctionHandler
from ..models import ToolDefinition
from ..schema import DeclarationParameterFactory, SchemaValidator
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger
from ...types import FunctionDeclaration, Tool

logger = get_logger(__name__)


class HandlerRegistry:
    """
    Maps function names to their handlers and, when known, their declarations.

    The registry is built by the caller before a request is sent and is only read
    while a response is dispatched.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition, Callable],
        handler: Optional[Union[FunctionHandler, Callable]] = None,
        declaration: Optional[FunctionDeclaration] = None,
        description: Optional[str] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Register a function the model may call.

        Three forms are supported:

        1. A ``ToolDefinition``.
        2. A name and a ``handler`` taking the raw argument dict, i.e. ``handler(args)``.
           The declaration is optional: pass ``declaration``, or ``description`` and
           ``parameters``, or leave both out when the request declares the function itself.
        3. An annotated Python function. Its name, docstring and signature produce the
           declaration and its arguments are validated before each call.

        Args:
            name_or_tool: A ``ToolDefinition``, a function name, or an annotated function.
            handler: Handler for form 2, a ``FunctionHandler`` or a plain/async callable.
            declaration: Explicit declaration for form 2.
            description: Description for form 2 (or an override for form 3).
            parameters: JSON-schema parameters for form 2.

        Raises:
            ToolRegistrationError: On missing arguments, mismatched names or duplicate names.
            ToolValidationError: If an annotated function is undocumented or has an invalid signature.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        elif callable(name_or_tool):
            tool = self._generate_tool_definition(name_or_tool, description=description)
        else:
            tool = self._build_named_definition(name_or_tool, handler, declaration, description, parameters)

        if tool.name in self.tools:
            msg = f"Function '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.info(f"Successfully registered function: '{tool.name}'")

    def unregister(self, name: str) -> None:
        """Remove a function from the registry.

        Raises:
            ToolNotFoundError: If the function is not registered.
        """
        if name not in self.tools:
            raise ToolNotFoundError(f"Function '{name}' not found in the registry.")
        del self.tools[name]
        logger.info(f"Successfully unregistered function: '{name}'")

    def tool(self, func: Callable) -> Callable:
        """A decorator to register an annotated function.

        Returns:
            The original function, after registering it.
        """
        self.register(func)
        return func

    def get(self, name: str) -> Optional[FunctionHandler]:
        """Return the handler registered under ``name``, if any."""
        tool = self.tools.get(name)
        return tool.handler if tool else None

    def __contains__(self, name: object) -> bool:
        return name in self.tools

    def __len__(self) -> int:
        return len(self.tools)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tools)

    @property
    def declarations(self) -> list[FunctionDeclaration]:
        """Declarations of all registered functions that carry one."""
        return [tool.declaration for tool in self.tools.values() if tool.declaration is not None]

    @property
    def tool_object(self) -> Optional[Tool]:
        """
        A ``Tool`` holding every known declaration, or None if there is none.
        """
        declarations = self.declarations
        if not declarations:
            return None
        return Tool(function_declarations=declarations)

    @property
    def implementations(self) -> Dict[str, FunctionHandler]:
        """Returns a dictionary mapping function names to their handlers."""
        return {name: tool.handler for name, tool in self.tools.items()}

    @staticmethod
    def _build_named_definition(
        name: str,
        handler: Optional[Union[FunctionHandler, Callable]],
        declaration: Optional[FunctionDeclaration],
        description: Optional[str],
        parameters: Optional[Dict[str, Any]],
    ) -> ToolDefinition:
        if handler is None:
            raise ToolRegistrationError("If passing name as string, handler is required.")

        if declaration is not None:
            if declaration.name != name:
                raise ToolRegistrationError(
                    f"Declaration name '{declaration.name}' does not match registered name '{name}'."
                )
        elif description is not None:
            declaration = FunctionDeclaration(name=name, description=description, parameters=parameters)
        elif parameters is not None:
            raise ToolRegistrationError("If passing name and parameters, description is required.")

        return ToolDefinition(name=name, handler=FunctionHandler.from_callable(handler), declaration=declaration)

    def _generate_tool_definition(
        self, func: Callable, name: Optional[str] = None, description: Optional[str] = None
    ) -> ToolDefinition:
        """Generate a ToolDefinition from an annotated function.

        Args:
            func: The function to generate a definition for.
            name: Optional name override.
            description: Optional description override.

        Returns:
            A ToolDefinition with a generated declaration and a validating handler.

        Raises:
            ToolValidationError: If the function is missing a docstring or parameter descriptions.
        """
        tool_name = name or func.__name__
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        signature = inspect.signature(func)
        fields = self._build_fields(signature, tool_name)

        # create_model expects **field_definitions: Any
        args_model = create_model(f"{tool_name}Params", **cast(Dict[str, Any], fields))
        raw_schema = args_model.model_json_schema()
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # proxies=False returns plain dicts instead of JsonRef objects
        parameters_schema = jsonref.replace_refs(raw_schema, proxies=False)
        parameters_schema = SchemaValidator.sanitize_schema(parameters_schema)

        declaration = FunctionDeclaration(name=tool_name, description=description, parameters=parameters_schema)
        return ToolDefinition(
            name=tool_name,
            handler=ToolFunctionHandler(func, args_model=args_model),
            declaration=declaration,
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Function '{tool_name}' missing docstring. The model needs a description of what it does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    @staticmethod
    def _build_fields(signature: inspect.Signature, tool_name: str) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue
            annotation, field = DeclarationParameterFactory.declaration_field(param, function_name=tool_name)
            fields[param_name] = (annotation, field)
        return fields
