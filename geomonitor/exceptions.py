class AppException(Exception):
    """
    Базовый класс для всех исключений сервиса мониторинга.
    """
    pass


class NotFoundError(AppException):
    """
    Запись не найдена (точка доступа, WISP и т.п.).
    """
    pass


class ValidationError(AppException):
    """
    Некорректные входные данные (период, координаты, статус).
    """
    pass


class ServiceError(AppException):
    """
    Ошибка бизнес-логики или внешнего сервиса (например, owmw).
    """
    pass
