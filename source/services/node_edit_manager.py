"""Node edit domain module."""

from core.domain_impl.infra import runtime_log_service
from core.domain_impl.infra import runtime_paths_service
from core.domain_impl.infra import settings_service
from core.domain_impl.json import json_field_sync_core
from core.domain_impl.json import json_io_core
from core.domain_impl.json import json_view_core
from core.domain_impl.support import node_edit_flow_service
from core.domain_impl.support import node_store_service


class NodeEditManager:
    json_field_sync_core = json_field_sync_core
    json_io_core = json_io_core
    json_view_core = json_view_core
    node_edit_flow_service = node_edit_flow_service
    node_store_service = node_store_service
    runtime_log_service = runtime_log_service
    runtime_paths_service = runtime_paths_service
    settings_service = settings_service
    normalize = staticmethod(json_view_core.normalize)
    format_path = staticmethod(json_view_core.format_path)
    apply_edit = staticmethod(json_io_core.apply_edit)
    sync_fields = staticmethod(json_field_sync_core.sync_fields)
    select_node = staticmethod(json_view_core.select_node)


NODE_EDIT = NodeEditManager()
