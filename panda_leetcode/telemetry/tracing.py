"""Tracer provider for the service; spans leave the process only when a collector is configured."""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

SERVICE_NAME = "panda-leetcode"
SERVICE_NAMESPACE = "panda"
SERVICE_VERSION = "1.0.0"


def service_resource(environment: str = "development") -> Resource:
    """Resource attributes shared by exported spans and log records."""
    return Resource.create(
        {
            "service.name": SERVICE_NAME,
            "service.namespace": SERVICE_NAMESPACE,
            "service.version": SERVICE_VERSION,
            "deployment.environment": environment,
        }
    )


def setup_tracing(
    otlp_endpoint: str = "",
    environment: str = "development",
    sample_ratio: float = 1.0,
) -> TracerProvider:
    """Install the global tracer provider and return it for flushing at shutdown.

    Root spans are kept at ``sample_ratio``; a request arriving with a
    ``traceparent`` follows the caller's decision.
    """
    provider = TracerProvider(
        resource=service_resource(environment),
        sampler=ParentBased(TraceIdRatioBased(sample_ratio)),
    )
    if otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    return provider
