#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Per-number aggregation of call/SMS records
"""

import logging

from core.models import PhoneAggregate

MIN_NUMBER_LENGTH = 6
LOCATION_EPSILON = 1e-4


def same_location(a, b):
    # planar box on degrees, cell-tower coordinates are coarse
    return (abs(a.latitude - b.latitude) < LOCATION_EPSILON
            and abs(a.longitude - b.longitude) < LOCATION_EPSILON)


def add_location(locations, location):
    """Append location unless a near-duplicate is already listed. Returns True if added."""
    if location is None or any(same_location(loc, location) for loc in locations):
        return False
    locations.append(location)
    return True


def _sort_key(record):
    return (record.date_time is not None, record.date_time)


def sort_records(records):
    """Sort in place by timestamp, undated records first"""
    records.sort(key=_sort_key)
    return records


def update_activity(aggregate, when):
    if when is None:
        return
    if aggregate.first_activity is None or when < aggregate.first_activity:
        aggregate.first_activity = when
    if aggregate.last_activity is None or when > aggregate.last_activity:
        aggregate.last_activity = when


def aggregate_by_phone_number(records, subscribers):
    """
    Build one PhoneAggregate per caller number. Records are keyed on the
    caller only; numbers shorter than MIN_NUMBER_LENGTH digits are noise.
    """
    phone_map = {}
    subscriber_map = {s.number: s for s in subscribers}

    for record in records:
        number = record.caller_number
        if not number or len(number) < MIN_NUMBER_LENGTH:
            continue

        aggregate = phone_map.get(number)
        if aggregate is None:
            subscriber = subscriber_map.get(number)
            aggregate = PhoneAggregate(
                number=number,
                identity=subscriber.full_name if subscriber else None,
            )
            phone_map[number] = aggregate

        if record.is_sms:
            aggregate.sms_count += 1
        else:
            aggregate.call_count += 1

        if not aggregate.imei and record.imei:
            aggregate.imei = record.imei

        update_activity(aggregate, record.date_time)
        add_location(aggregate.locations, record.location)
        aggregate.records.append(record)

    for aggregate in phone_map.values():
        sort_records(aggregate.records)

    located = sum(1 for a in phone_map.values() if a.locations)
    logging.info(f"Aggregated {len(phone_map)} phone numbers, {located} with locations")
    return phone_map
