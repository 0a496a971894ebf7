"""
Document models for hubs, rooms and resources.

Each model is a dataclass with:
  - an `id` field (uuid4 hex string, assigned once at creation)
  - a `to_dict()` instance method producing the persisted record
  - a `from_dict(data)` classmethod for deserialization
  - a `new(...)` classmethod that validates raw form input

The persisted field names (studentPassword, logoUrl, createdAt, ...) are the
ones the stored document has always used, so they differ from the attribute
names here.
"""

from __future__ import annotations

import time
import uuid
from urllib.parse import urlparse
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from scholarly.errors import ValidationError

MEETING_DOMAIN = 'zoom.us'
LINK_SCHEMES = ('http', 'https')


class ResourceType(str, Enum):
    DOCUMENT = 'DOCUMENT'
    VIDEO = 'VIDEO'
    ANNOUNCEMENT = 'ANNOUNCEMENT'
    TIMETABLE = 'TIMETABLE'

    @classmethod
    def _missing_(cls, value):
        # Older documents stored general material as "PDF"
        if value == 'PDF':
            return cls.DOCUMENT
        return None

    @classmethod
    def parse(cls, value) -> ResourceType:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f'Unknown resource type: {value!r}', field='type')


class Role(str, Enum):
    NONE = 'NONE'
    STUDENT = 'STUDENT'
    ADMIN = 'ADMIN'


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def new_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


def _required_text(value, field_name, strip=True) -> str:
    if value is None:
        raise ValidationError(f'{field_name} is required', field=field_name)
    if not isinstance(value, str):
        raise ValidationError(f'{field_name} must be text', field=field_name)
    text = value.strip() if strip else value
    if not text.strip():
        raise ValidationError(f'{field_name} is required', field=field_name)
    return text


def _optional_text(value, field_name) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{field_name} must be text', field=field_name)
    return value.strip() or None


def _require_key(data: Dict[str, Any], key: str, record: str):
    if not isinstance(data, dict):
        raise ValidationError(f'{record} record must be an object')
    if key not in data:
        raise ValidationError(f'{record} record is missing "{key}"', field=key)
    return data[key]


def _optional_url(value, field_name) -> Optional[str]:
    url = _optional_text(value, field_name)
    if url is not None and urlparse(url).scheme.lower() not in LINK_SCHEMES:
        raise ValidationError(f'{field_name} must be an http or https link', field=field_name)
    return url


def _stored_text(data: Dict[str, Any], key: str, record: str) -> str:
    value = _require_key(data, key, record)
    if not isinstance(value, str):
        raise ValidationError(f'{record} "{key}" must be text', field=key)
    return value


def _stored_optional_text(data: Dict[str, Any], key: str, record: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{record} "{key}" must be text', field=key)
    return value or None


def _stored_timestamp(data: Dict[str, Any], key: str, record: str) -> int:
    value = _require_key(data, key, record)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f'{record} "{key}" must be a number', field=key)
    try:
        return int(value)
    except (OverflowError, ValueError):
        raise ValidationError(f'{record} "{key}" must be finite', field=key)


# ===========================================================================
# Resource
# ===========================================================================

@dataclass(frozen=True)
class Resource:
    id: str
    type: ResourceType
    title: str
    description: str
    url: Optional[str] = None
    created_at: int = 0

    @classmethod
    def new(cls, type, title, description, url=None, now=None) -> Resource:
        return cls(
            id=new_id(),
            type=ResourceType.parse(type),
            title=_required_text(title, 'title'),
            description=_required_text(description, 'description'),
            url=_optional_url(url, 'url'),
            created_at=now if now is not None else now_ms(),
        )

    @property
    def is_meeting_link(self) -> bool:
        return bool(self.url) and MEETING_DOMAIN in self.url

    @property
    def is_live_room(self) -> bool:
        return self.type == ResourceType.VIDEO and self.is_meeting_link

    @property
    def link_label(self) -> str:
        return 'Join Meeting' if self.is_meeting_link else 'Open Resource'

    def to_dict(self) -> Dict[str, Any]:
        d = {
            'id': self.id,
            'type': self.type.value,
            'title': self.title,
            'description': self.description,
            'createdAt': self.created_at,
        }
        if self.url is not None:
            d['url'] = self.url
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Resource:
        return cls(
            id=_stored_text(data, 'id', 'resource'),
            type=ResourceType.parse(_require_key(data, 'type', 'resource')),
            title=_stored_text(data, 'title', 'resource'),
            description=_stored_text(data, 'description', 'resource'),
            url=_stored_optional_text(data, 'url', 'resource'),
            created_at=_stored_timestamp(data, 'createdAt', 'resource'),
        )


# ===========================================================================
# Room
# ===========================================================================

@dataclass(frozen=True)
class Room:
    id: str
    name: str
    teacher: str
    resources: List[Resource] = field(default_factory=list)

    @classmethod
    def new(cls, name, teacher) -> Room:
        return cls(
            id=new_id(),
            name=_required_text(name, 'name'),
            teacher=_required_text(teacher, 'teacher'),
        )

    @property
    def resource_count(self) -> int:
        return len(self.resources)

    def find_resource(self, resource_id) -> Optional[Resource]:
        for res in self.resources:
            if res.id == resource_id:
                return res
        return None

    def with_resources(self, resources) -> Room:
        return replace(self, resources=list(resources))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'teacher': self.teacher,
            'resources': [r.to_dict() for r in self.resources],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Room:
        resources = _require_key(data, 'resources', 'room')
        if not isinstance(resources, list):
            raise ValidationError('room resources must be a list', field='resources')
        return cls(
            id=_stored_text(data, 'id', 'room'),
            name=_stored_text(data, 'name', 'room'),
            teacher=_stored_text(data, 'teacher', 'room'),
            resources=[Resource.from_dict(r) for r in resources],
        )


# ===========================================================================
# Hub
# ===========================================================================

@dataclass(frozen=True)
class Hub:
    id: str
    name: str
    student_passphrase: str
    admin_passphrase: str
    description: str = ''
    logo_url: Optional[str] = None
    classes: List[Room] = field(default_factory=list)

    @classmethod
    def new(cls, name, student_passphrase, admin_passphrase,
            description=None, logo_url=None) -> Hub:
        # Passphrases are matched exactly, so they are never stripped
        return cls(
            id=new_id(),
            name=_required_text(name, 'name'),
            student_passphrase=_required_text(student_passphrase, 'student_passphrase', strip=False),
            admin_passphrase=_required_text(admin_passphrase, 'admin_passphrase', strip=False),
            description=_optional_text(description, 'description') or '',
            logo_url=_optional_url(logo_url, 'logo_url'),
        )

    @property
    def room_count(self) -> int:
        return len(self.classes)

    def find_room(self, room_id) -> Optional[Room]:
        for room in self.classes:
            if room.id == room_id:
                return room
        return None

    def with_classes(self, classes) -> Hub:
        return replace(self, classes=list(classes))

    def to_dict(self) -> Dict[str, Any]:
        d = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'studentPassword': self.student_passphrase,
            'adminPassword': self.admin_passphrase,
            'classes': [c.to_dict() for c in self.classes],
        }
        if self.logo_url is not None:
            d['logoUrl'] = self.logo_url
        return d

    def to_summary(self) -> Dict[str, Any]:
        """Public listing record; never includes passphrases."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'logoUrl': self.logo_url,
            'roomCount': self.room_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Hub:
        classes = _require_key(data, 'classes', 'hub')
        if not isinstance(classes, list):
            raise ValidationError('hub classes must be a list', field='classes')
        return cls(
            id=_stored_text(data, 'id', 'hub'),
            name=_stored_text(data, 'name', 'hub'),
            student_passphrase=_stored_text(data, 'studentPassword', 'hub'),
            admin_passphrase=_stored_text(data, 'adminPassword', 'hub'),
            description=_stored_optional_text(data, 'description', 'hub') or '',
            logo_url=_stored_optional_text(data, 'logoUrl', 'hub'),
            classes=[Room.from_dict(c) for c in classes],
        )
