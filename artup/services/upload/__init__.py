"""
Upload services for artup.

Services:
- UploadService: Orchestrates a file spec upload
- get_upload_params: Resolves one spec entry into UploadParams
- add_build_props: Appends build properties to a property string
- create_upload_service_config: Builds a repository client configuration
"""

from .params import get_upload_params
from .props import add_build_props
from .service import UploadService, upload
from .service_config import create_upload_service_config, get_min_checksum_deploy_size

__all__ = [
    "UploadService",
    "add_build_props",
    "create_upload_service_config",
    "get_min_checksum_deploy_size",
    "get_upload_params",
    "upload",
]
