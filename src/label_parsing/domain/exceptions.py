"""
Исключения для домена Label Parsing.

Сам парсер этикеток никогда не бросает исключений: плохой скан
даёт пустые поля и низкий confidence. Эти ошибки относятся к
окружению парсера: файлы захватов, профили экранов, CLI.
"""


class LabelParsingError(Exception):
    """Базовое исключение для ошибок домена Label Parsing."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Label Parsing Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class LabelFileSystemError(LabelParsingError):
    """Ошибка файловой системы в домене Label Parsing."""
    pass


class LabelFileNotFoundError(LabelFileSystemError):
    """Файл захвата не найден."""
    pass


class LabelFileWriteError(LabelFileSystemError):
    """Ошибка чтения/записи файла."""
    pass


class LabelDataFormatError(LabelParsingError):
    """Файл захвата имеет неожиданную структуру."""
    pass


class ScanProfileConfigurationError(LabelParsingError):
    """Ошибка конфигурации профилей сканирования."""
    pass
