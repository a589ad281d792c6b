"""Activity log enums."""

from enum import Enum


class ActivityAction(str, Enum):
    """Actions recorded in the activity log."""

    CREATE_CLIENT = "create_client"
    UPDATE_CLIENT = "update_client"
    DELETE_CLIENT = "delete_client"

    CREATE_PROJECT = "create_project"
    UPDATE_PROJECT = "update_project"
    DELETE_PROJECT = "delete_project"

    START_TIMER = "start_timer"
    STOP_TIMER = "stop_timer"
    UPDATE_TIME_ENTRY = "update_time_entry"
    DELETE_TIME_ENTRY = "delete_time_entry"

    CREATE_INVOICE = "create_invoice"
    UPDATE_INVOICE = "update_invoice"
    DELETE_INVOICE = "delete_invoice"

    CREATE_QUOTE = "create_quote"
    UPDATE_QUOTE = "update_quote"
    DELETE_QUOTE = "delete_quote"

    CREATE_DOCUMENT = "create_document"
    DELETE_DOCUMENT = "delete_document"

    CREATE_AB_TEST = "create_ab_test"
    UPDATE_AB_TEST = "update_ab_test"

    UPDATE_USER_ROLE = "update_user_role"
    DEACTIVATE_USER = "deactivate_user"
    ACTIVATE_USER = "activate_user"

    CREATE_PAYMENT_KEY = "create_payment_key"
    UPDATE_PAYMENT_KEY = "update_payment_key"
    DELETE_PAYMENT_KEY = "delete_payment_key"


class EntityType(str, Enum):
    """Entity types referenced by activity logs and A/B results."""

    USER = "user"
    CLIENT = "client"
    PROJECT = "project"
    TIME_ENTRY = "time_entry"
    INVOICE = "invoice"
    QUOTE = "quote"
    DOCUMENT = "document"
    AB_TEST = "ab_test"
    PAYMENT_KEY = "payment_key"
