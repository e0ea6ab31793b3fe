from typing import Optional


class DomainException(Exception):
    code = "domain_error"

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class MissingFieldError(DomainException):
    code = "missing_field"

    def __init__(self, field: str):
        super().__init__(f"Не заполнено обязательное поле: {field}", field=field)


class InvalidReferenceError(DomainException):
    code = "invalid_reference"

    def __init__(self, field: str, reference_id: str):
        self.reference_id = reference_id
        super().__init__(f"Ссылка {field}={reference_id} не найдена", field=field)


class InvalidTimestampError(DomainException):
    code = "invalid_timestamp"

    def __init__(self, field: str, raw: str):
        self.raw = raw
        super().__init__(f"Некорректная дата/время в поле {field}: {raw!r}", field=field)


class InvalidFieldError(DomainException):
    code = "invalid_field"

    def __init__(self, field: str, raw):
        self.raw = raw
        super().__init__(f"Недопустимое значение поля {field}: {raw!r}", field=field)


class OrderNotFoundError(DomainException):
    code = "not_found"

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Заказ {order_id} не найден", field="id")


class CatalogServiceError(DomainException):
    code = "catalog_unavailable"
