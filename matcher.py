"""
Отбор слов, содержащих шаблон, и вывод отчётов по файлам.

Каждый файл разбивается на "тексты" (последовательности символов,
разделённые пробелами или переводами строк), каждый текст проверяется
алгоритмом Хорспула с общей для всего запуска таблицей сдвигов.
"""
import argparse
import logging
import time
from dataclasses import dataclass, field
from functools import partial, wraps
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from termcolor import colored

from horspool import (InvalidPatternError, ShiftTable, build_shift_table,
                      first_occurrence, is_valid)

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "the"
# Файлы по умолчанию лежат рядом с модулем, а не в текущем каталоге
INPUT_DIR = Path(__file__).parent / "inputfiles"
DEFAULT_FILES = [str(INPUT_DIR / "sample.txt"), str(INPUT_DIR / "sample2.txt")]
INLINE_SOURCE = "<text>"

INVALID_PATTERN_MESSAGE = ("Неверный шаблон. Допустимые символы: строчные и прописные "
                           "латинские буквы (a-z, A-Z). Цифры и специальные символы "
                           "не поддерживаются.")


def log_time_decorator(func):
    """Декоратор для логирования времени выполнения функции."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        end = time.perf_counter()
        logger.debug("%s выполнена за %.6f секунд", func.__name__, end - start)
        return result

    return wrapper


@dataclass
class FileReport:
    """Результат обработки одного источника текстов."""

    source: str
    pattern: str
    texts: List[str]
    matches: List[str] = field(default_factory=list)
    # позиции вхождения шаблона, параллельно matches
    positions: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.texts)

    @property
    def matched(self) -> int:
        return len(self.matches)


def texts_from_string(text: str) -> List[str]:
    """Разбивает строку на тексты по пробелам и переводам строк."""
    return text.split()


def texts_from_file(path: str) -> List[str]:
    """
    Загружает все тексты из файла.

    Если файл не удаётся открыть, печатается сообщение и возвращается
    пустой список: отсутствие файла не прерывает запуск.
    """
    try:
        with open(path, 'r', encoding="utf-8") as f:
            return texts_from_string(f.read())
    except OSError as e:
        logger.debug("Не удалось открыть %s: %s", path, e)
        print(f"Ошибка: не удалось открыть файл '{path}'.")
        return []


def _scan_texts(table: ShiftTable,
                texts: Sequence[str],
                case_sensitivity: bool = True,
                trace: bool = False
) -> List[Tuple[str, int]]:
    """
    Проверяет каждый текст и собирает совпадения.

    :param table: Таблица сдвигов (шаблон берётся из неё)
    :param texts: Тексты-кандидаты
    :param case_sensitivity: False - сравнение без учёта регистра
    :param trace: Печатать таблицу сдвигов для каждого проверяемого текста
    :return: Список кортежей (исходный текст, позиция вхождения)
    """
    pattern = table.pattern
    found = []
    for text in texts:
        # Текст с недопустимыми символами просто не совпадает
        if not is_valid(text):
            logger.debug("Текст %r пропущен: недопустимые символы", text)
            continue
        if trace:
            print(f'Таблица сдвигов для шаблона "{pattern}": {table.render()} (Текст: "{text}")')
        work_text = text if case_sensitivity else text.lower()
        position = first_occurrence(pattern, work_text, table)
        if position is not None:
            found.append((text, position))
    return found


def match_pattern_to_texts(table: ShiftTable,
                           texts: Sequence[str],
                           trace: bool = False,
                           case_sensitivity: bool = True
) -> List[str]:
    """Возвращает тексты, содержащие хотя бы одно вхождение шаблона."""
    return [text for text, _ in _scan_texts(table, texts, case_sensitivity, trace)]


@log_time_decorator
def build_report(table: ShiftTable,
                 source: str,
                 texts: List[str],
                 trace: bool = False,
                 case_sensitivity: bool = True,
                 pattern: Optional[str] = None
) -> FileReport:
    """
    Строит отчёт по одному источнику с общей таблицей сдвигов.

    :param pattern: Шаблон в том виде, в каком его ввёл пользователь
                    (по умолчанию берётся из таблицы)
    """
    found = _scan_texts(table, texts, case_sensitivity, trace)
    logger.debug("%s: %d из %d текстов совпали", source, len(found), len(texts))
    return FileReport(
        source=source,
        pattern=pattern if pattern is not None else table.pattern,
        texts=texts,
        matches=[text for text, _ in found],
        positions=[position for _, position in found],
    )


def highlight_text(text: str, position: int, length: int, color: bool = True) -> str:
    """Возвращает текст с цветовым выделением найденного вхождения."""
    if not color or position < 0 or position + length > len(text):
        return text
    end = position + length
    return text[:position] + colored(text[position:end], 'red', attrs=['bold']) + text[end:]


def format_report_header(source: str) -> str:
    return f'--- Отчёт для "{source}" ---'


def format_report(report: FileReport, color: bool = True, header: bool = True) -> str:
    """
    Формирует текст отчёта по одному источнику.

    :param header: False - без заголовка, если он уже напечатан до обработки файла
    """
    lines = [format_report_header(report.source)] if header else []
    lines += [
        f'Шаблон для поиска: "{report.pattern}"',
        f'Количество текстов в файле: {report.total}',
        f'Количество текстов с вхождением шаблона: {report.matched}',
        '',
        f'Тексты, содержащие шаблон "{report.pattern}":',
    ]
    for text, position in zip(report.matches, report.positions):
        lines.append("-> " + highlight_text(text, position, len(report.pattern), color))
    lines.append('--- Конец отчёта ---')
    lines.append('')
    return "\n".join(lines)


def _iter_reports(table: ShiftTable,
                  pattern: str,
                  sources: List[Tuple[str, Callable[[], List[str]]]],
                  trace: bool,
                  case_sensitivity: bool,
                  on_source: Optional[Callable[[str], None]]
) -> Iterator[FileReport]:
    for source, load in sources:
        if on_source is not None:
            on_source(source)
        # Файл читается только когда до него дошла очередь
        yield build_report(table, source, load(), trace, case_sensitivity, pattern)


def run(pattern: str,
        files: Sequence[str] = (),
        trace: bool = False,
        case_sensitivity: bool = True,
        inline_text: Optional[str] = None,
        on_source: Optional[Callable[[str], None]] = None
) -> Iterator[FileReport]:
    """
    Обрабатывает все источники одним шаблоном.

    Шаблон проверяется и таблица строится сразу при вызове, до чтения
    первого файла, поэтому недопустимый шаблон прерывает весь запуск.
    Сами источники обрабатываются по одному по мере перебора результата.

    :param pattern: Шаблон
    :param files: Пути к файлам
    :param trace: Режим трассировки (печать таблицы сдвигов)
    :param case_sensitivity: True - учитывать регистр, False - нет
    :param inline_text: Тексты, переданные строкой вместо файлов
    :param on_source: Вызывается с именем источника перед его чтением
    :return: Итератор отчётов в порядке источников
    :raises InvalidPatternError: Шаблон пуст или содержит недопустимые символы
    """
    # Проверяется исходный шаблон: lower() может превратить недопустимый
    # символ в допустимый (KELVIN SIGN -> 'k')
    table = build_shift_table(pattern)
    if not case_sensitivity:
        table = build_shift_table(pattern.lower())
    logger.debug("Таблица сдвигов: %r", table)

    sources: List[Tuple[str, Callable[[], List[str]]]] = []
    if inline_text is not None:
        sources.append((INLINE_SOURCE, partial(texts_from_string, inline_text)))
    for path in files:
        sources.append((path, partial(texts_from_file, path)))

    return _iter_reports(table, pattern, sources, trace, case_sensitivity, on_source)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Поиск слов, содержащих шаблон (алгоритм Хорспула).")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-t", "--text", type=str, help="Тексты для проверки (через пробел)")
    group.add_argument("-f", "--file", type=str, nargs="+", dest="files",
                       help="Пути до файлов для проверки")

    parser.add_argument("-p", "--pattern", type=str, default=DEFAULT_PATTERN,
                        help="Шаблон для поиска (только a-z, A-Z)")
    parser.add_argument("-c", "--case", action="store_false",
                        dest='case_sensitivity',
                        help="Игнорировать регистр (по умолчанию учитывается)")
    parser.add_argument("--trace", action="store_true",
                        help="Печатать таблицу сдвигов для каждого текста")
    parser.add_argument("--no-color", action="store_false", dest="color",
                        help="Не выделять вхождения цветом")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Отладочное логирование")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")

    files = args.files
    if files is None:
        files = [] if args.text is not None else DEFAULT_FILES

    def announce(source: str) -> None:
        # Маркер и заголовок печатаются до чтения файла, чтобы трассировка
        # и ошибки открытия попадали внутрь отчёта своего файла
        if args.trace:
            print(" **TEST**")
        print(format_report_header(source))

    try:
        reports = run(args.pattern, files, trace=args.trace,
                      case_sensitivity=args.case_sensitivity, inline_text=args.text,
                      on_source=announce)
    except InvalidPatternError as e:
        logger.debug("Запуск прерван: %s", e)
        print(INVALID_PATTERN_MESSAGE)
        return 1

    for report in reports:
        print(format_report(report, color=args.color, header=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
