"""
Исключения ядра.
"""


class InvalidArgument(ValueError):
    """
    Некорректный аргумент вызова: число бит, отрицательная шкала,
    пустая кривая, отрицательная сумма и т.п.

    Синхронная ошибка вызывающего, никогда не повторяется.
    Вырожденные результаты (NaN, +inf, 0, None) ошибками не являются.
    """
