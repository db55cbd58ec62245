from typing import List

from .configs import AppSettings
from .sinks import GazeSink, JsonFileExporter, ZMQSink

def create_session_sinks(settings: AppSettings) -> List[GazeSink]:
    """
    Creates fresh sink instances for a new tracking session.
    """
    sinks = []

    # ZMQ
    if settings.zmq.enabled:
        sinks.append(ZMQSink(host=settings.zmq.host))

    return sinks

def create_exporter(settings: AppSettings) -> JsonFileExporter:
    return JsonFileExporter(
        output_dir=settings.export.output_dir,
        filename_prefix=settings.export.filename_prefix,
    )
