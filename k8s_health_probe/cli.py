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

import argparse
import logging
import sys

from .constants import DEFAULT_TRACE_SERVICE_NAME
from .health_check import LISTER_BACKENDS
from .settings import ProbeSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="k8s-health-probe",
        description=(
            "List cluster nodes and services, pick a reachable endpoint "
            "and send one request to it."
        ),
    )
    # Every flag is optional; without any, the kubeconfig's current context is used.
    parser.add_argument("--kubeconfig", default=None, help="Path to the kubeconfig file")
    parser.add_argument("--context", default=None, help="Kubeconfig context to use")
    parser.add_argument(
        "-n", "--namespace",
        default=None,
        help="Namespace to list services in (default: the context's namespace)"
    )
    parser.add_argument(
        "--backend",
        choices=sorted(LISTER_BACKENDS),
        default="kubectl",
        help="Use the kubectl binary or the Kubernetes API for listings"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each listing and for the request (default: no limit)"
    )
    parser.add_argument("--retries", type=int, default=0, help="Retries for the request")
    parser.add_argument(
        "--enable-tracing",
        action="store_true",
        help="Export OpenTelemetry spans (requires the 'tracing' extra)"
    )
    parser.add_argument(
        "--trace-service-name",
        default=DEFAULT_TRACE_SERVICE_NAME,
        help="Service name reported on spans"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level,
                        format='%(asctime)s - %(levelname)s - %(message)s',
                        stream=sys.stdout)

    try:
        settings = ProbeSettings.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    with settings.create_health_check() as health_check:
        return health_check.run()
