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
This module manages OpenTelemetry tracing for the health probe.

OpenTelemetry is an optional dependency (the `tracing` extra). Nothing from it
is imported until tracing is requested, so an untraced run never touches it.
"""

import atexit
import functools
import importlib.util
import logging
import threading

OPENTELEMETRY_AVAILABLE = importlib.util.find_spec("opentelemetry") is not None

# --- Global state for the singleton TracerProvider ---
_TRACER_PROVIDER = None
_TRACER_PROVIDER_LOCK = threading.Lock()


def initialize_tracer(service_name: str) -> bool:
    """
    Initializes the global OpenTelemetry TracerProvider once per process.

    Returns False when OpenTelemetry, its SDK or the OTLP exporter is not
    installed. If the provider already
    exists with a different service name, the existing one is kept and a
    warning is logged.
    """
    global _TRACER_PROVIDER

    if not OPENTELEMETRY_AVAILABLE:
        logging.error(
            "OpenTelemetry not installed; skipping tracer initialization.")
        return False

    with _TRACER_PROVIDER_LOCK:
        if _TRACER_PROVIDER is not None:
            existing_name = _TRACER_PROVIDER.resource.attributes.get(
                "service.name")
            if existing_name and existing_name != service_name:
                logging.warning(
                    f"Global TracerProvider already initialized with service name '{existing_name}'. "
                    f"Ignoring request to initialize with '{service_name}'."
                )
            return True

        # opentelemetry-api alone is not enough; the SDK and exporter come with the extra.
        try:
            from opentelemetry import trace
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
            from opentelemetry.sdk.resources import Resource
            from opentelemetry.sdk.trace import TracerProvider
            from opentelemetry.sdk.trace.export import BatchSpanProcessor
        except ImportError as e:
            logging.error(
                f"OpenTelemetry SDK or OTLP exporter not installed ({e}); "
                "skipping tracer initialization.")
            return False

        resource = Resource(attributes={"service.name": service_name})
        _TRACER_PROVIDER = TracerProvider(resource=resource)
        _TRACER_PROVIDER.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter())
        )
        trace.set_tracer_provider(_TRACER_PROVIDER)
        # Flush pending spans when the process exits.
        atexit.register(_TRACER_PROVIDER.shutdown)
        logging.info(
            f"Global OpenTelemetry TracerProvider configured for service '{service_name}'.")
        return True


def trace_span(span_suffix):
    """
    Decorator to wrap a method in an OpenTelemetry span.

    The span is named "{self.trace_service_name}.{span_suffix}". If
    `self.tracer` is None (tracing disabled), the method runs undecorated.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            tracer = getattr(self, 'tracer', None)
            if not tracer:
                return func(self, *args, **kwargs)

            service_name = getattr(
                self, 'trace_service_name', 'k8s-health-probe')
            span_name = f"{service_name}.{span_suffix}"

            with tracer.start_as_current_span(span_name):
                return func(self, *args, **kwargs)
        return wrapper
    return decorator


def set_span_attributes(tracer, **attributes):
    """Sets attributes on the current span when tracing is enabled."""
    if not tracer:
        return
    from opentelemetry import trace

    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


class TracerManager:
    """
    Manages the tracing lifecycle of a single health check run.

    The run gets its own instrumentation scope and a 'lifecycle' span that is
    the parent of every step span.
    """

    def __init__(self, service_name: str):
        from opentelemetry import trace

        instrumentation_scope_name = service_name.replace('-', '_')
        self.tracer = trace.get_tracer(instrumentation_scope_name)
        self.lifecycle_span_name = f"{service_name}.lifecycle"
        self.parent_span = None
        self.context_token = None

    def start_lifecycle_span(self):
        """Starts the parent span and attaches it to the current context."""
        from opentelemetry import context, trace

        self.parent_span = self.tracer.start_span(self.lifecycle_span_name)
        ctx = trace.set_span_in_context(self.parent_span)
        self.context_token = context.attach(ctx)

    def end_lifecycle_span(self):
        """Ends the parent span and detaches the context."""
        from opentelemetry import context

        if self.context_token:
            context.detach(self.context_token)
            self.context_token = None
        if self.parent_span:
            self.parent_span.end()
            self.parent_span = None
