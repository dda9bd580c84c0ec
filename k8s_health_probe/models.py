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
Data structures shared by the resolver, the listers and the prober.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from .constants import FALLBACK_HOST, FALLBACK_SCHEME


class ServiceType(str, Enum):
    """Kubernetes Service types as printed in the TYPE column."""
    CLUSTER_IP = "ClusterIP"
    NODE_PORT = "NodePort"
    LOAD_BALANCER = "LoadBalancer"
    EXTERNAL_NAME = "ExternalName"


class ServiceRow(BaseModel):
    """A single parsed line of `kubectl get services` output."""
    name: str
    service_type: ServiceType | None = None  # None when the TYPE column is unrecognized.
    external_address: str | None = None  # None for placeholders such as <none>.
    port_spec: str = ""  # e.g. "80:30000/TCP"

    @property
    def port(self) -> int | None:
        """The leading port of the port spec, e.g. 80 for "80:30000/TCP"."""
        candidate = self.port_spec.split(":", 1)[0].split("/", 1)[0]
        if not (candidate.isascii() and candidate.isdigit()):
            return None
        return int(candidate)


class ResolvedTarget(BaseModel):
    """The single endpoint a run sends its request to."""
    model_config = ConfigDict(frozen=True)

    scheme: Literal["http", "https"]
    host: str
    port: int | None = None

    @property
    def url(self) -> str:
        if self.port is None:
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def is_fallback(self) -> bool:
        return self == FALLBACK_TARGET

    @property
    def verify_tls(self) -> bool:
        """Certificate verification is only skipped for the fallback target."""
        return not self.is_fallback


FALLBACK_TARGET = ResolvedTarget(scheme=FALLBACK_SCHEME, host=FALLBACK_HOST)


class ProbeResult(BaseModel):
    """Outcome of the outbound request."""
    url: str
    ok: bool = False
    status_code: int | None = None  # None when no response was received.
    body: str = ""
    error: str | None = None
