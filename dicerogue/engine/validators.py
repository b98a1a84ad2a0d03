"""
Dice Rogue - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Sequence

MIN_FACE = 1
MAX_FACE = 8  # D8 can show 7 or 8


def validate_dice_values(
    values: Sequence[int],
    min_count: int = 1,
    max_count: int | None = None,
) -> tuple[int, ...]:
    """
    Validate and normalize submitted dice values.

    Args:
        values: Sequence of dice values to validate
        min_count: Minimum number of dice required
        max_count: Maximum number of dice allowed (None = no limit)

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    if not values:
        if min_count > 0:
            raise ValueError(f"At least {min_count} dice required.")
        return tuple()

    values_tuple = tuple(values)
    count = len(values_tuple)

    if count < min_count:
        raise ValueError(f"At least {min_count} dice required, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} dice allowed, got {count}.")

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (MIN_FACE <= value <= MAX_FACE):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between {MIN_FACE} and {MAX_FACE}."
            )

    return values_tuple


def validate_slot_index(index: int, slot_count: int) -> int:
    """
    Validate a single hand or pool slot index.

    Raises:
        ValueError: If the index is not an integer in range
    """
    if not isinstance(index, int) or isinstance(index, bool):
        raise ValueError(f"Slot index must be an integer, got {type(index).__name__}.")
    if not (0 <= index < slot_count):
        raise ValueError(
            f"Slot index {index} is out of range. Must be between 0 and {slot_count - 1}."
        )
    return index


def validate_slot_indices(
    indices: Sequence[int],
    slot_count: int,
    max_count: int | None = None,
) -> tuple[int, ...]:
    """
    Validate a selection of distinct slot indices.

    Args:
        indices: Selected slots, in selection order
        slot_count: Number of slots that exist
        max_count: Maximum selection size (None = no limit)

    Returns:
        Validated indices as a tuple, order preserved

    Raises:
        ValueError: If the selection is empty, too large, repeats a slot
            or references a missing slot
    """
    if not indices:
        raise ValueError("Cannot select an empty set of dice.")

    indices_tuple = tuple(indices)
    if max_count is not None and len(indices_tuple) > max_count:
        raise ValueError(f"Cannot select more than {max_count} dice, got {len(indices_tuple)}.")

    if len(set(indices_tuple)) != len(indices_tuple):
        raise ValueError("Each die can only be selected once.")

    for index in indices_tuple:
        validate_slot_index(index, slot_count)

    return indices_tuple
