from .base import GazeSink
from .export import JsonFileExporter
from .heatmap import save_heatmap
from .zmq import ZMQSink
