"""
HAL collection of a user's API keys.
"""

from typing import Any, Dict, Optional

from launchpad.core.constants import API_KEY_PREFIX_LENGTH, APPLICATION_JSON
from launchpad.hal.models import HalTemplate
from launchpad.models.api_key import ApiKey
from .base import isoformat
from .collection import CollectionAdapter


class ApiKeyCollectionAdapter(CollectionAdapter[ApiKey]):
    """
    API keys are shown in full: the key cannot be recovered from anywhere
    else, so the owner's list is the only place to read it again.
    """

    controller = "api_keys"
    list_operation = "get_api_keys"
    item_operation = "get_api_key"
    delete_operation = "delete_api_keys"
    collection_key = "apiKeys"
    id_property = "apiKeyIds"
    item_id_param = "api_key_id"
    title = "API Keys"
    item_title = "API Key"

    def item_id(self, item: ApiKey) -> str:
        return item.api_key_id

    def item_properties(self, item: ApiKey) -> Dict[str, Any]:
        return {
            "apiKeyId": item.api_key_id,
            "userId": item.user_id,
            "label": item.label,
            "apiKey": item.api_key,
            "keyPrefix": item.api_key[:API_KEY_PREFIX_LENGTH],
            "dateCreated": isoformat(item.date_created),
            "dateLastAccessed": isoformat(item.date_last_accessed),
        }

    def create_template_for_collection(self) -> Optional[HalTemplate]:
        return self.create_template(
            "Create API Key",
            "POST",
            self.href(self.controller, "create_api_key", user_id=self.user_id),
            content_type=APPLICATION_JSON,
            properties=[
                self.create_property("label", type="text", required=True, prompt="API Key Label"),
            ],
        )
