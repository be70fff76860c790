"""
Form input validation for new projects.

Rules are checked before anything reaches the store; the store itself
trusts its callers.
"""
from dataclasses import dataclass
from typing import Optional, Union, Tuple


class ValidationError(Exception):
    """Raised when project input fails validation."""
    pass


@dataclass
class Validatable:
    """One input value plus the rules it must satisfy."""
    value: Union[str, int, float]
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None


def validate(item: Validatable) -> bool:
    """Check a value against its rules.

    Length bounds apply only to strings and value bounds only to numbers.
    """
    value = item.value
    is_number = isinstance(value, (int, float)) and not isinstance(value, bool)

    if item.required and len(str(value).strip()) == 0:
        return False
    if isinstance(value, str):
        if item.min_length is not None and len(value) < item.min_length:
            return False
        if item.max_length is not None and len(value) > item.max_length:
            return False
    if is_number:
        if item.min is not None and value < item.min:
            return False
        if item.max is not None and value > item.max:
            return False
    return True


@dataclass
class ProjectInputRules:
    """Bounds applied to the new-project form."""
    title_max_length: Optional[int] = None
    description_min_length: int = 5
    people_min: int = 1
    people_max: int = 5

    def check(self, title: str, description: str, people: Union[str, int]) -> Tuple[str, str, int]:
        """
        Validate and coerce raw form values.

        Returns:
            (title, description, people) with people as int.

        Raises:
            ValidationError naming the first field that failed.
        """
        for name, value in (("title", title), ("description", description)):
            if not isinstance(value, str):
                raise ValidationError(f"Invalid {name}: expected text, got {type(value).__name__}")
        title, description = title.strip(), description.strip()

        try:
            people = int(str(people).strip())
        except (ValueError, TypeError):
            raise ValidationError(f"People must be a whole number, got: '{people}'")

        fields = [
            ("title", Validatable(value=title, required=True, max_length=self.title_max_length)),
            ("description", Validatable(value=description, required=True,
                                        min_length=self.description_min_length)),
            ("people", Validatable(value=people, required=True,
                                   min=self.people_min, max=self.people_max)),
        ]
        for name, item in fields:
            if not validate(item):
                raise ValidationError(f"Invalid {name}: {item.value!r}")
        return title, description, people
