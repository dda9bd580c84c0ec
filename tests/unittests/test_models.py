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

import pytest
from pydantic import ValidationError

from k8s_health_probe.models import FALLBACK_TARGET, ResolvedTarget, ServiceRow


@pytest.mark.parametrize("port_spec, expected", [
    ("80:30000/TCP", 80),
    ("443/TCP", 443),
    ("53/UDP,53/TCP", 53),
    ("<none>", None),
    ("", None),
    ("²/TCP", None),
])
def test_service_row_port(port_spec, expected):
    assert ServiceRow(name="svc", port_spec=port_spec).port == expected


def test_fallback_target():
    assert FALLBACK_TARGET.url == "https://kubernetes.default.svc"
    assert FALLBACK_TARGET.is_fallback
    assert not FALLBACK_TARGET.verify_tls


def test_discovered_target_verifies_tls():
    target = ResolvedTarget(scheme="http", host="34.123.45.67", port=80)

    assert target.url == "http://34.123.45.67:80"
    assert not target.is_fallback
    assert target.verify_tls


def test_equal_target_counts_as_fallback():
    target = ResolvedTarget(scheme="https", host="kubernetes.default.svc")

    assert target.is_fallback


def test_resolved_target_is_immutable():
    target = ResolvedTarget(scheme="http", host="1.2.3.4", port=80)

    with pytest.raises(ValidationError):
        target.host = "5.6.7.8"


def test_resolved_target_rejects_unknown_scheme():
    with pytest.raises(ValidationError):
        ResolvedTarget(scheme="ftp", host="1.2.3.4")
