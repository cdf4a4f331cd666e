from sqlalchemy.orm import class_mapper
from datetime import date, datetime
import pytz


def sqlalchemy_to_dict(obj):
    """Convert a SQLAlchemy object to a dictionary."""
    if not obj:
        return None
    mapper = class_mapper(obj.__class__)
    result = {}
    for c in mapper.columns:
        value = getattr(obj, c.key)
        # Convert datetime objects to ISO format strings
        if hasattr(value, 'isoformat'):
            value = value.isoformat()
        # Convert Decimal objects to floats
        elif hasattr(value, 'normalize') and hasattr(value, 'from_float'):
            value = float(value)
        # Convert enum types to strings
        elif hasattr(value, 'name') and hasattr(value, 'value'):
            value = value.value
        result[c.key] = value
    return result


def today_ist() -> date:
    return datetime.now(pytz.timezone('Asia/Kolkata')).date()


__all__ = ['sqlalchemy_to_dict', 'today_ist']
