from typing import Dict, Any, List, NamedTuple
import jsonschema

from lola.domain.tool.tool_registry import ToolSpec


class ValidationResult(NamedTuple):
    is_valid: bool
    errors: List[str]


# Parameter validation against each tool's declared JSON Schema
class ToolParameterValidator:
    @staticmethod
    def validate_tool_call(tool: ToolSpec, parameters: Dict[str, Any]) -> ValidationResult:
        if not isinstance(parameters, dict):
            return ValidationResult(False, [f"Arguments must be an object, got {type(parameters).__name__}"])

        try:
            jsonschema.validate(parameters, tool.parameters)
            return ValidationResult(True, [])

        except jsonschema.ValidationError as e:
            location = "/".join(str(part) for part in e.absolute_path)
            prefix = f"{location}: " if location else ""
            return ValidationResult(False, [f"Schema validation failed: {prefix}{e.message}"])
        except jsonschema.SchemaError as e:
            return ValidationResult(False, [f"Tool {tool.name} declares an invalid schema: {e.message}"])
