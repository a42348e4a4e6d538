"""Publishing of report tables to the chart-hosting service."""

from .datawrapper import ChartPublishError, DatawrapperClient, load_api_token, publish_reports

__all__ = ["ChartPublishError", "DatawrapperClient", "load_api_token", "publish_reports"]
