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

from .health_check import HealthCheck
from .listers import ClusterApiLister, KubectlLister, ListingError
from .models import FALLBACK_TARGET, ProbeResult, ResolvedTarget, ServiceRow, ServiceType
from .prober import Prober
from .resolver import resolve_target
from .settings import ProbeSettings

__all__ = [
    "HealthCheck",
    "ClusterApiLister",
    "KubectlLister",
    "ListingError",
    "FALLBACK_TARGET",
    "ProbeResult",
    "ResolvedTarget",
    "ServiceRow",
    "ServiceType",
    "Prober",
    "resolve_target",
    "ProbeSettings",
]
