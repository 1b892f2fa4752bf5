"""
Модуль для проверки вхождения шаблона в текст с использованием
алгоритма Хорспула (правило плохого символа).

Поддерживается только алфавит из 52 символов:
- строчные латинские буквы a-z (индексы 0-25);
- прописные латинские буквы A-Z (индексы 26-51).

Таблица сдвигов строится один раз на шаблон и дальше только читается,
поэтому её можно разделять между любым количеством проверок.
"""
from enum import Enum
from string import ascii_lowercase, ascii_uppercase
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

ALPHABET = ascii_lowercase + ascii_uppercase
ALPHABET_SIZE = len(ALPHABET)

_SYMBOL_INDEX: Dict[str, int] = {symbol: i for i, symbol in enumerate(ALPHABET)}


class Violation(Enum):
    """Причина, по которой символ не входит в алфавит."""
    OUT_OF_RANGE = "вне диапазона A-z"
    RESERVED_GAP = "между диапазонами Z и a"


class InvalidPatternError(ValueError):
    """Шаблон содержит неподдерживаемый символ (или пуст)."""

    def __init__(self, pattern: str, position: Optional[int] = None,
                 symbol: Optional[str] = None, reason: Optional[Violation] = None):
        self.pattern = pattern
        self.position = position
        self.symbol = symbol
        self.reason = reason
        if position is None:
            message = "Пустой шаблон не поддерживается"
        else:
            message = (f"Недопустимый символ {symbol!r} в позиции {position} "
                       f"шаблона {pattern!r}: {reason.value}")
        super().__init__(message)


def symbol_to_index(symbol: str) -> Optional[int]:
    """Индекс символа в алфавите или None, если символ не поддерживается."""
    return _SYMBOL_INDEX.get(symbol)


def classify(symbol: str) -> Optional[Violation]:
    """
    Определяет, почему символ не входит в алфавит.

    :param symbol: Проверяемый символ
    :return: None для допустимого символа, иначе причина отказа
    """
    if symbol in _SYMBOL_INDEX:
        return None
    if len(symbol) == 1 and "Z" < symbol < "a":
        return Violation.RESERVED_GAP
    return Violation.OUT_OF_RANGE


def find_violation(symbols: Iterable[str]) -> Optional[Tuple[int, str, Violation]]:
    """
    Ищет первый неподдерживаемый символ.

    :param symbols: Последовательность символов (шаблон или текст)
    :return: Кортеж (позиция, символ, причина) или None, если все символы допустимы
    """
    for position, symbol in enumerate(symbols):
        reason = classify(symbol)
        if reason is not None:
            return position, symbol, reason
    return None


def is_valid(symbols: Iterable[str]) -> bool:
    """True, если все символы лежат в алфавите. Пустая строка допустима."""
    return all(symbol in _SYMBOL_INDEX for symbol in symbols)


class ShiftTable:

    __slots__ = ['pattern', 'entries']

    def __init__(self, pattern: str, entries: Sequence[int]):
        """
        Неизменяемая таблица сдвигов для одного шаблона.
        - pattern: шаблон, по которому построена таблица
        - entries: 52 расстояния сдвига в порядке ALPHABET
        """
        if len(entries) != ALPHABET_SIZE:
            raise ValueError(f'Таблица сдвигов должна содержать {ALPHABET_SIZE} элемента')
        object.__setattr__(self, 'pattern', pattern)
        object.__setattr__(self, 'entries', tuple(entries))

    def __setattr__(self, name, value):
        raise AttributeError('ShiftTable доступна только для чтения')

    def __repr__(self) -> str:
        return f"ShiftTable(pattern={self.pattern!r}, shifts={self.non_default()})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShiftTable):
            return NotImplemented
        return self.pattern == other.pattern and self.entries == other.entries

    def __hash__(self) -> int:
        return hash((self.pattern, self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, symbol: str) -> int:
        index = symbol_to_index(symbol)
        if index is None:
            raise KeyError(symbol)
        return self.entries[index]

    def shift(self, symbol: str) -> int:
        """
        Сдвиг окна для символа текста, совпавшего с концом шаблона.

        Символа вне алфавита нет в шаблоне, поэтому для него сдвиг равен
        длине шаблона, как и для любого отсутствующего символа.
        """
        index = symbol_to_index(symbol)
        if index is None:
            return len(self.pattern)
        return self.entries[index]

    def non_default(self) -> Dict[str, int]:
        """Только те символы, для которых сдвиг меньше длины шаблона."""
        m = len(self.pattern)
        return {symbol: shift for symbol, shift in zip(ALPHABET, self.entries) if shift != m}

    def render(self) -> str:
        """Текстовое представление всех 52 сдвигов через пробел."""
        return " ".join(str(shift) for shift in self.entries)


def build_shift_table(pattern: str) -> ShiftTable:
    """
    Строит таблицу сдвигов Хорспула.

    Все элементы инициализируются длиной шаблона m. Затем для позиций
    0..m-2 записывается m - 1 - j; проход идёт слева направо, поэтому
    для повторяющегося символа остаётся самое правое вхождение.
    Последний символ шаблона сам по себе в таблицу не попадает.

    :param pattern: Шаблон из символов алфавита
    :return: Таблица сдвигов, каждый элемент в диапазоне [1, m]
    :raises InvalidPatternError: Шаблон пуст или содержит неподдерживаемый символ
    """
    if not pattern:
        raise InvalidPatternError(pattern)
    violation = find_violation(pattern)
    if violation is not None:
        raise InvalidPatternError(pattern, *violation)

    m = len(pattern)
    entries = [m] * ALPHABET_SIZE
    for j in range(m - 1):
        entries[_SYMBOL_INDEX[pattern[j]]] = m - 1 - j
    return ShiftTable(pattern, entries)


def first_occurrence(pattern: str, text: str, table: ShiftTable) -> Optional[int]:
    """
    Позиция первого найденного вхождения шаблона в текст.

    Непроверенный текст не приводит к ошибке: символ вне алфавита не может
    совпасть с символом шаблона и сдвигает окно на всю длину шаблона.

    :param pattern: Шаблон
    :param text: Текст
    :param table: Таблица сдвигов, построенная для этого же шаблона
    :return: Индекс начала вхождения или None
    """
    if table.pattern != pattern:
        raise ValueError(f'Таблица сдвигов построена для {table.pattern!r}, а не для {pattern!r}')

    m = len(pattern)
    n = len(text)
    i = m - 1  # позиция правого конца шаблона в тексте
    while i <= n - 1:
        k = 0
        # Сравнение справа налево
        while k < m and pattern[m - 1 - k] == text[i - k]:
            k += 1
        if k == m:
            return i - m + 1
        # Сдвиг по символу под последней позицией шаблона, а не по несовпавшему
        i += table.shift(text[i])
    return None


def is_match(pattern: str, text: str, table: ShiftTable) -> bool:
    """
    Проверяет, встречается ли шаблон в тексте хотя бы один раз.

    Текст с неподдерживаемыми символами считается несовпадением, а не ошибкой.
    """
    if not is_valid(text):
        return False
    return first_occurrence(pattern, text, table) is not None


def search(pattern: str, texts: Iterable[str]) -> List[str]:
    """
    Отбирает тексты, содержащие шаблон, сохраняя исходный порядок.

    :param pattern: Шаблон (проверяется один раз)
    :param texts: Тексты-кандидаты
    :return: Список совпавших текстов
    :raises InvalidPatternError: Шаблон недопустим
    """
    table = build_shift_table(pattern)
    return [text for text in texts if is_match(pattern, text, table)]
