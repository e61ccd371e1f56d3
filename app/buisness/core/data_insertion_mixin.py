"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods for automatic data insertion and
JSON serialization of the workflow models.
"""

from app import db
from datetime import date, datetime
from sqlalchemy import inspect
from app.logger import get_logger

logger = get_logger("roll_erp.buisness.core.data_insertion")

AUDIT_FIELDS = ('created_at', 'updated_at', 'created_by_id', 'updated_by_id')


def to_camel_case(key):
    head, *rest = key.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    - create_from_dict(): Create and save model instance from dictionary
    """

    @classmethod
    def from_dict(cls, data_dict, user_id=None, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        mapper = inspect(cls)
        columns = {c.key for c in mapper.columns}

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            if key == 'password' and hasattr(cls, 'set_password'):
                continue
            if key in ('created_at', 'updated_at') and value is None:
                continue
            filtered_data[key] = value

        instance = cls(**filtered_data)

        if 'password' in data_dict and hasattr(instance, 'set_password'):
            instance.set_password(data_dict['password'])

        if user_id is not None:
            if hasattr(instance, 'created_by_id') and not instance.created_by_id:
                instance.created_by_id = user_id
            if hasattr(instance, 'updated_by_id'):
                instance.updated_by_id = user_id

        return instance

    def to_dict(self, include_relationships=False, include_audit_fields=True, camel_case=False):
        """
        Convert model instance to dictionary

        Args:
            include_relationships (bool): Whether to include many-to-one relationship data
            include_audit_fields (bool): Whether to include audit fields
            camel_case (bool): Emit camelCase keys (the JSON API shape)

        Returns:
            dict: Dictionary representation of the model
        """
        result = {}
        mapper = inspect(self.__class__)

        for column in mapper.columns:
            if not include_audit_fields and column.key in AUDIT_FIELDS:
                continue
            if column.key == 'password_hash':
                continue

            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()

            key = to_camel_case(column.key) if camel_case else column.key
            result[key] = value

        if include_relationships:
            for relationship in mapper.relationships:
                if relationship.uselist:
                    continue
                key = to_camel_case(relationship.key) if camel_case else relationship.key
                if key in result:
                    continue
                related_obj = getattr(self, relationship.key)
                if related_obj is None:
                    result[key] = None
                elif hasattr(related_obj, 'to_dict'):
                    result[key] = related_obj.to_dict(include_audit_fields=False, camel_case=camel_case)
                else:
                    result[key] = str(related_obj)

        return result

    @classmethod
    def create_from_dict(cls, data_dict, user_id=None, skip_fields=None, commit=True):
        """
        Create and save a model instance from dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction

        Returns:
            Model instance (saved to database)
        """
        instance = cls.from_dict(data_dict, user_id, skip_fields)

        try:
            db.session.add(instance)
            if commit:
                db.session.commit()
                logger.info(f"Created {cls.__name__}: {instance}")
            return instance
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {cls.__name__}: {e}")
            raise
