"""
Пакет barcodegen
================

Движок кодирования одномерных штрихкодов: из строки данных и типа символогии
получается последовательность модулей ('1' штрих, '0' пробел), подпись и
список ошибок валидации.

Этот пакет предоставляет:
    - Около сорока символогий: UPC/EAN, 2 из 5, Code 39/93/128, Codabar,
      MSI, Code 11, PostNet, FIM, Pharmacode, Telepen
    - Расчёт и проверку контрольных цифр с политикой APPEND/VALIDATE/RECOMPUTE
    - Накопление ошибок вместо исключений (EncodingIssue)
    - Растровый рендеринг через Pillow (PNG/JPEG/BMP/GIF/TIFF)

Пример базового использования:
    >>> from src import generate, SymbologyType, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> result = generate(SymbologyType.EAN13, "400638133393", standardize_label=True)
    >>> result.label
    '4-006381-33393-1'
    >>> result.module_count
    95

Управление конфигурацией:
    >>> import os
    >>> os.environ['BARCODEGEN_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from src import load_config, BarcodeGenerator
    >>>
    >>> config = load_config()
    >>> gen = BarcodeGenerator(config=config)

Версия: 0.1.0
Лицензия: MIT
Python: 3.11+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "barcodegen Development Team"
__description__ = "1D barcode symbology encoding engine"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"barcodegen требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

LOG_NAMESPACE = "barcodegen"
LOG_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _setup_logging() -> None:
    """
    Инициализировать логирование пакета.

    Настраивает логгеры 'barcodegen' (для get_logger) и 'src' (для модулей,
    использующих logging.getLogger(__name__)):
    - Консольный обработчик (stderr) для WARNING и выше
    - Ротирующий файловый обработчик, только если задана переменная
      окружения BARCODEGEN_LOG_FILE (движок не пишет файлы по умолчанию)

    Уровень задаётся через BARCODEGEN_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR, CRITICAL; по умолчанию INFO).

    Идемпотентна: повторные вызовы ничего не меняют.
    """
    log_level = _LOG_LEVELS.get(
        os.environ.get("BARCODEGEN_LOG_LEVEL", "INFO").upper(), logging.INFO
    )
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    log_file = os.environ.get("BARCODEGEN_LOG_FILE")

    for name in (LOG_NAMESPACE, __name__):
        pkg_logger = logging.getLogger(name)
        if pkg_logger.handlers:
            continue
        pkg_logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        pkg_logger.addHandler(console_handler)

        if log_file:
            try:
                Path(log_file).parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.handlers.RotatingFileHandler(
                    filename=log_file,
                    maxBytes=10 * 1024 * 1024,  # 10 МБ
                    backupCount=5,
                    encoding="utf-8",
                )
                file_handler.setLevel(log_level)
                file_handler.setFormatter(formatter)
                pkg_logger.addHandler(file_handler)
            except OSError as e:
                pkg_logger.warning(
                    "Не удалось инициализировать файловое логирование: %s. "
                    "Используется только консоль.",
                    e,
                )

        pkg_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён 'barcodegen.<module_name>'.

    Аргументы:
        module_name: Обычно `__name__`.

    Пример:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Кодирование %s", "EAN13")
    """
    if module_name.startswith(LOG_NAMESPACE):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger(f"{LOG_NAMESPACE}.main")
    return logging.getLogger(f"{LOG_NAMESPACE}.{module_name.lstrip('.')}")


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

CONFIG_FILE_NAME = "barcodegen.json"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "standardize_label": False,
    "itf_pad_odd": False,
    "supplement_gap_modules": 9,
    "default_width": 300,
    "default_height": 150,
    "default_bar_width": None,
    "default_dpi": 96,
    "label_font_size": 12,
    "foreground": "black",
    "background": "white",
    "image_format": "PNG",
    "log_level": "INFO",
}


def default_config() -> Dict[str, Any]:
    """Копия конфигурации по умолчанию (без чтения файлов)."""
    return dict(_DEFAULT_CONFIG)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию из barcodegen.json поверх значений по умолчанию.

    Ключи конфигурации:
        - standardize_label: bool - Группировать подписи UPC/EAN (d-dddddd-ddddd-d)
        - itf_pad_odd: bool - Дополнять нечётные данные ITF ведущим нулём
        - supplement_gap_modules: int - Зазор перед дополнением (в модулях)
        - default_width / default_height: int - Размер изображения в пикселях
        - default_bar_width: int | None - Ширина модуля в пикселях (None = по ширине)
        - default_dpi: int - DPI для image_size
        - label_font_size: int - Размер шрифта подписи
        - foreground / background: str - Цвета Pillow
        - image_format: str - PNG, JPEG, BMP, GIF, TIFF
        - log_level: str - Уровень логирования

    Аргументы:
        config_path: Путь к файлу. Если None, ищется 'barcodegen.json'
            в текущем каталоге.

    Возвращает:
        Словарь со всеми ключами по умолчанию; пользовательские значения
        переопределяют их. Ошибочный JSON или не-объект даёт предупреждение
        в лог и конфигурацию по умолчанию.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(CONFIG_FILE_NAME)

    config = default_config()

    if not config_path.exists():
        logger.debug("Файл конфигурации %s не найден, используются значения по умолчанию", config_path)
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(
                f"Файл конфигурации должен содержать JSON-объект, "
                f"получен {type(user_config).__name__}"
            )
        config.update(user_config)
        logger.info("Конфигурация загружена из %s", config_path)
        if "log_level" in user_config:
            level = _LOG_LEVELS.get(str(user_config["log_level"]).upper())
            if level is None:
                logger.warning("Неизвестный уровень логирования: %r", user_config["log_level"])
            else:
                for name in (LOG_NAMESPACE, __name__):
                    logging.getLogger(name).setLevel(level)
    except json.JSONDecodeError as e:
        logger.warning(
            "Не удалось разобрать %s: недопустимый JSON в строке %d, столбце %d. "
            "Используется конфигурация по умолчанию.",
            config_path,
            e.lineno,
            e.colno,
        )
    except OSError as e:
        logger.warning(
            "Не удалось прочитать %s: %s. Используется конфигурация по умолчанию.",
            config_path,
            e,
        )
    except ValueError as e:
        logger.warning(
            "Недопустимый формат конфигурации: %s. Используется конфигурация по умолчанию.",
            e,
        )
    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить наличие сторонних библиотек.

    Проверяемые зависимости:
        - pillow: рендеринг изображений (renderer)
        - lxml: XML-сериализация результата
        - python-barcode: эталонный кодировщик для тестов

    Возвращает:
        Словарь имя пакета -> доступность. Исключений не вызывает.
    """
    dependencies: Dict[str, bool] = {}

    try:
        import PIL  # noqa: F401

        dependencies["pillow"] = True
    except ImportError:
        dependencies["pillow"] = False

    try:
        import lxml  # noqa: F401

        dependencies["lxml"] = True
    except ImportError:
        dependencies["lxml"] = False

    try:
        import barcode  # noqa: F401

        dependencies["python-barcode"] = True
    except ImportError:
        dependencies["python-barcode"] = False

    return dependencies


# =============================================================================
# ИНИЦИАЛИЗАЦИЯ ПАКЕТА
# =============================================================================

_setup_logging()

_logger = get_logger(__name__)
_logger.debug("barcodegen v%s инициализируется (Python %s)", __version__, sys.version)

# Импорты публичного API размещены после утилит: модули пакета
# обращаются к default_config() и get_logger() при импорте.
from .barcodegen.barcode_generator import BarcodeGenerator, generate  # noqa: E402
from .barcodegen.errors import BarcodeGenError, EncodingIssue, ErrorKind  # noqa: E402
from .barcodegen.result import EncodingResult  # noqa: E402
from .model.enums import CheckDigitPolicy, SymbologyType  # noqa: E402

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "default_config",
    "load_config",
    "check_dependencies",
    # Кодирование
    "BarcodeGenerator",
    "generate",
    "EncodingResult",
    "EncodingIssue",
    "ErrorKind",
    "BarcodeGenError",
    "SymbologyType",
    "CheckDigitPolicy",
]
