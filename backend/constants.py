"""
Application-wide constants.

This module centralizes the magic strings and numbers used throughout the
application to improve maintainability and reduce duplication.
"""


class ServerConfig:
    """Server configuration defaults"""

    HOST = "0.0.0.0"
    PORT = 8000

    @classmethod
    def url(cls) -> str:
        """Get the full server URL"""
        return f"http://{cls.HOST}:{cls.PORT}"


class PagingDefaults:
    """Default paging values for list endpoints"""

    PAGE = 1
    PAGE_SIZE = 20
    APPOINTMENTS_PAGE_SIZE = 50
    MAX_PAGE_SIZE = 200


class FieldLimits:
    """Maximum lengths and sizes of fields accepted by the API"""

    CUSTOMER_NUMBER = 32
    NAME = 100
    EMAIL = 256
    PHONE = 32
    ADDRESS = 256
    PREFERENCE = 64
    NOTE_TEXT = 1000
    NOTE_AUTHOR = 100
    APPOINTMENT_NOTES = 512
    ITEM_DESCRIPTION = 256
    MEASUREMENT_NOTES = 512
    CURRENCY = 3
    ITEM_QUANTITY = 100_000


class CustomerSort:
    """Accepted sort keys for the customer list"""

    FIRST_NAME = "firstname"
    LAST_NAME = "lastname"
    EMAIL = "email"
    CUSTOMER_NUMBER = "customernumber"
    CREATED = "created"
    REGISTRATION_DATE = "registrationdate"

    ALL = {FIRST_NAME, LAST_NAME, EMAIL, CUSTOMER_NUMBER, CREATED, REGISTRATION_DATE}


class WorkOrderSort:
    """Accepted sort keys for work order lists"""

    CREATED = "created"
    STATUS = "status"

    ALL = {CREATED, STATUS}


class RecordStatusFilter:
    """Soft-delete filter values for list endpoints"""

    ENABLED = "enabled"
    DISABLED = "disabled"
    ALL = "all"


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
