# Copyright 2026 The Kubernetes Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Resolves the endpoint to probe from `kubectl get services` output.

The listing is parsed by column position (NAME TYPE CLUSTER-IP EXTERNAL-IP
PORT(S) AGE). The first LoadBalancer row with an assigned external address
wins; when there is none, the API server's in-cluster DNS name is used.
"""

import logging
from typing import Iterable, Iterator

from .constants import (
    DISCOVERED_SCHEME,
    HEADER_FIRST_FIELDS,
    LOAD_BALANCER_MARKER,
    REJECTED_ADDRESSES,
)
from .models import FALLBACK_TARGET, ResolvedTarget, ServiceRow, ServiceType


def parse_service_row(line: str) -> ServiceRow | None:
    """Parses one listing line, or returns None if it has too few columns."""
    fields = line.split()
    if len(fields) < 5:
        return None

    name, type_column, _, address, port_spec = fields[:5]
    try:
        service_type = ServiceType(type_column)
    except ValueError:
        service_type = None

    return ServiceRow(
        name=name,
        service_type=service_type,
        external_address=None if address in REJECTED_ADDRESSES else address,
        port_spec=port_spec,
    )


def _is_header(line: str) -> bool:
    fields = line.split(maxsplit=1)
    return bool(fields) and fields[0] in HEADER_FIRST_FIELDS


def load_balancer_rows(listing: str) -> Iterator[ServiceRow]:
    """Yields parsed rows for every line carrying the LoadBalancer marker."""
    for line in listing.splitlines():
        if not line.strip() or _is_header(line):
            continue
        if LOAD_BALANCER_MARKER not in line:
            continue
        row = parse_service_row(line)
        if row is None:
            logging.debug(f"Skipping malformed service line: {line!r}")
            continue
        yield row


def select_target(rows: Iterable[ServiceRow]) -> ResolvedTarget:
    """Returns a target for the first usable row, or the fallback target."""
    for row in rows:
        if row.external_address is None:
            logging.debug(f"Service '{row.name}' has no external address yet.")
            continue
        port = row.port
        if port is None:
            logging.debug(
                f"Service '{row.name}' has an unusable port spec: {row.port_spec!r}")
            continue
        target = ResolvedTarget(
            scheme=DISCOVERED_SCHEME, host=row.external_address, port=port)
        logging.info(
            f"Found potential external IP: {row.external_address}:{port} "
            f"from service '{row.name}'")
        return target

    logging.info("No usable external IP found from LoadBalancer services.")
    return FALLBACK_TARGET


def resolve_target(listing: str) -> ResolvedTarget:
    """
    Resolves exactly one target from raw service listing text.

    Rows whose EXTERNAL-IP is <none>, <pending>, empty or ClusterIP are
    skipped. kubectl prints <pending> while a LoadBalancer has no address
    yet, so a ready LoadBalancer listed after a pending one still wins.
    """
    return select_target(load_balancer_rows(listing))
