#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Cross-file merge of per-number aggregates, plus the derived views used by
map and timeline consumers (trajectory, summary counts)
"""

import logging

from core.aggregator import add_location, sort_records, update_activity
from core.models import FileOutcome, MapPosition, PhoneAggregate


def _parsed_results(results):
    for result in results:
        if isinstance(result, FileOutcome):
            if result.success and result.data is not None:
                yield result.data
        elif result is not None:
            yield result


def merge_results(results):
    """
    Merge aggregates by number across files. Accepts ParsedFileResult or
    FileOutcome items (failed outcomes are skipped). Counts sum, records
    are concatenated and re-sorted, locations are unioned with the same
    near-duplicate rule as within a file. Input aggregates are not modified.
    """
    merged = {}

    for parsed in _parsed_results(results):
        for number, phone in parsed.phone_numbers.items():
            target = merged.get(number)
            if target is None:
                target = PhoneAggregate(number=number)
                merged[number] = target

            target.call_count += phone.call_count
            target.sms_count += phone.sms_count
            target.identity = target.identity or phone.identity
            target.imei = target.imei or phone.imei
            update_activity(target, phone.first_activity)
            update_activity(target, phone.last_activity)
            for location in phone.locations:
                add_location(target.locations, location)
            target.records.extend(phone.records)

    for aggregate in merged.values():
        sort_records(aggregate.records)

    logging.info(f"Merged into {len(merged)} phone numbers")
    return list(merged.values())


def build_trajectory(aggregate):
    """Chronological positions of the records that carry a location"""
    return [
        MapPosition(
            lat=r.location.latitude,
            lng=r.location.longitude,
            timestamp=r.date_time,
            site_name=r.location.site_name,
            cell_id=r.location.cell_id,
        )
        for r in aggregate.records
        if r.location is not None
    ]


def summarize(aggregates):
    return {
        "totalNumbers": len(aggregates),
        "numbersWithLocation": sum(1 for a in aggregates if a.locations),
        "totalRecords": sum(len(a.records) for a in aggregates),
        "totalLocations": sum(len(a.locations) for a in aggregates),
    }
