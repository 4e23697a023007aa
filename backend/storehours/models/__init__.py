from storehours.models.retail_chain import RetailChain
from storehours.models.city import City
from storehours.models.location import Location
from storehours.models.work_hour import WorkHour, NATIVE_LOCALE, ENGLISH_LOCALE

__all__ = [
    "RetailChain",
    "City",
    "Location",
    "WorkHour",
    "NATIVE_LOCALE",
    "ENGLISH_LOCALE",
]
