#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data types shared by the parsing pipeline, the merger and the exporters
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


def _iso(value):
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class LocationData:
    site_name: str
    cell_id: str
    longitude: float
    latitude: float
    azimuth: str = "-"

    def to_dict(self):
        return {
            "siteName": self.site_name,
            "cellId": self.cell_id,
            "longitude": self.longitude,
            "latitude": self.latitude,
            "azimuth": self.azimuth,
        }


@dataclass(frozen=True)
class CallRecord:
    id: str
    caller_number: str
    called_number: str
    imei: str
    date_time: Optional[datetime]
    duration: str                 # "00:01:30", seconds, or "SMS"
    location: Optional[LocationData]
    raw_location: str

    @property
    def is_sms(self):
        return self.duration.lower() == "sms"

    def to_dict(self):
        return {
            "id": self.id,
            "callerNumber": self.caller_number,
            "calledNumber": self.called_number,
            "imei": self.imei,
            "dateTime": _iso(self.date_time),
            "duration": self.duration,
            "location": self.location.to_dict() if self.location else None,
            "rawLocation": self.raw_location,
        }


@dataclass
class SubscriberInfo:
    number: str
    full_name: str = ""
    birth_date: Optional[str] = None
    cni_number: Optional[str] = None
    cni_expiration: Optional[str] = None
    address: Optional[str] = None

    def to_dict(self):
        return {
            "number": self.number,
            "fullName": self.full_name,
            "birthDate": self.birth_date,
            "cniNumber": self.cni_number,
            "cniExpiration": self.cni_expiration,
            "address": self.address,
        }


@dataclass
class PhoneAggregate:
    """Per-number rollup. Built by the aggregator, read-only afterwards."""
    number: str
    identity: Optional[str] = None
    imei: Optional[str] = None
    call_count: int = 0
    sms_count: int = 0
    first_activity: Optional[datetime] = None
    last_activity: Optional[datetime] = None
    locations: List[LocationData] = field(default_factory=list)
    records: List[CallRecord] = field(default_factory=list)

    def to_dict(self):
        return {
            "number": self.number,
            "identity": self.identity,
            "imei": self.imei,
            "callCount": self.call_count,
            "smsCount": self.sms_count,
            "locations": [loc.to_dict() for loc in self.locations],
            "records": [r.to_dict() for r in self.records],
            "firstActivity": _iso(self.first_activity),
            "lastActivity": _iso(self.last_activity),
        }


@dataclass
class ParsedFileResult:
    file_name: str
    file_type: str
    phone_numbers: Dict[str, PhoneAggregate]
    all_records: List[CallRecord]
    subscribers: List[SubscriberInfo]

    def to_dict(self):
        return {
            "fileName": self.file_name,
            "fileType": self.file_type,
            "phoneNumbers": [agg.to_dict() for agg in self.phone_numbers.values()],
            "allRecords": [r.to_dict() for r in self.all_records],
            "subscribers": [s.to_dict() for s in self.subscribers],
        }


@dataclass
class FileOutcome:
    """Result entry for one file of a batch"""
    file_name: str
    success: bool
    data: Optional[ParsedFileResult] = None
    error: Optional[str] = None

    def to_dict(self):
        out = {"fileName": self.file_name, "success": self.success}
        if self.success:
            out["data"] = self.data.to_dict()
        else:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class MapPosition:
    lat: float
    lng: float
    timestamp: Optional[datetime]
    site_name: str
    cell_id: str

    def to_dict(self):
        return {
            "lat": self.lat,
            "lng": self.lng,
            "timestamp": _iso(self.timestamp),
            "siteName": self.site_name,
            "cellId": self.cell_id,
        }
