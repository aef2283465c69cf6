from typing import Sequence


def clamp(value: float, min_value: float, max_value: float) -> float:
    """
    «Зажимает» число в диапазон [min_value, max_value].
    """
    return max(min_value, min(value, max_value))


def mean(values: Sequence[float]) -> float:
    """
    Среднее арифметическое последовательности чисел.

    Raises:
        ValueError: если values пуст.
    """
    if not values:
        raise ValueError("Cannot compute mean of empty sequence")
    return sum(values) / len(values)


def round_percentage(value: float) -> float:
    """
    Процент доступности для отображения: в пределах [0, 100],
    с одним знаком после запятой.
    """
    return round(clamp(float(value), 0.0, 100.0), 1)
