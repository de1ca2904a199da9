# orderdesk/core/content_store.py
import json
import requests
from typing import Optional, Dict, Any, List

from .config import get_config_value


class ContentStoreError(Exception):
    """Raised when the content store rejects or fails a request"""

    def __init__(self, message: str, status_code: int = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class Patch:
    """Partial update of a single document, sent on commit()"""

    def __init__(self, client: "ContentStoreClient", document_id: str):
        self.client = client
        self.document_id = document_id
        self.fields: Dict[str, Any] = {}

    def set(self, fields: Dict[str, Any]) -> "Patch":
        self.fields.update(fields)
        return self

    def to_mutation(self) -> Dict[str, Any]:
        return {"patch": {"id": self.document_id, "set": dict(self.fields)}}

    def commit(self) -> Dict[str, Any]:
        if not self.fields:
            raise ValueError(f"Nothing to set on document {self.document_id}")
        return self.client.mutate([self.to_mutation()])


class ContentStoreClient:
    """Client for the Sanity HTTP query and mutation APIs"""

    def __init__(self, project_id: str, dataset: str = "production",
                 api_version: str = "2023-05-03", token: str = None,
                 use_cdn: bool = False, timeout: int = 15,
                 session: requests.Session = None):
        if not project_id:
            raise ValueError("A content store project id is required")
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version.lstrip("v")
        self.token = token
        self.use_cdn = use_cdn
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> "ContentStoreClient":
        """Build a client from app.config > Config > environment"""
        use_cdn = get_config_value("SANITY_USE_CDN", False)
        if isinstance(use_cdn, str):
            use_cdn = use_cdn.lower() in ("1", "true", "yes")
        return cls(
            project_id=get_config_value("SANITY_PROJECT_ID"),
            dataset=get_config_value("SANITY_DATASET", "production"),
            api_version=get_config_value("SANITY_API_VERSION", "2023-05-03"),
            token=get_config_value("SANITY_TOKEN"),
            use_cdn=bool(use_cdn),
            timeout=int(get_config_value("SANITY_TIMEOUT", 15)),
        )

    def _base_url(self, cdn: bool = False) -> str:
        host = "apicdn" if cdn else "api"
        return f"https://{self.project_id}.{host}.sanity.io/v{self.api_version}/data"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code not in (200, 201):
            message = f"Content store returned HTTP {response.status_code}"
            if isinstance(data, dict) and data.get("error"):
                error = data["error"]
                if isinstance(error, dict):
                    error = error.get("description") or error.get("message") or error
                message = f"{message}: {error}"
            raise ContentStoreError(message, status_code=response.status_code,
                                    body=data if data is not None else response.text)

        if not isinstance(data, dict):
            raise ContentStoreError("Content store returned a non-JSON response",
                                    status_code=response.status_code, body=response.text)
        if data.get("error"):
            raise ContentStoreError(f"Content store error: {data['error']}",
                                    status_code=response.status_code, body=data)
        return data

    def fetch(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run a GROQ query and return its result

        Args:
            query: GROQ query string
            params: Query parameters, sent as $name=<json>

        Returns:
            The `result` member of the response
        """
        url = f"{self._base_url(cdn=self.use_cdn)}/query/{self.dataset}"
        query_params = {"query": query}
        for name, value in (params or {}).items():
            query_params[f"${name}"] = json.dumps(value)

        try:
            response = self.session.get(url, params=query_params,
                                        headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise ContentStoreError(f"Content store query failed: {e}") from e

        return self._handle_response(response).get("result")

    def mutate(self, mutations: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Send a transaction of mutations and wait until it is visible"""
        url = f"{self._base_url()}/mutate/{self.dataset}"
        params = {"returnIds": "true", "visibility": "sync"}
        headers = self._headers()
        headers["Content-Type"] = "application/json"

        try:
            response = self.session.post(url, params=params, headers=headers,
                                         json={"mutations": mutations}, timeout=self.timeout)
        except requests.RequestException as e:
            raise ContentStoreError(f"Content store mutation failed: {e}") from e

        return self._handle_response(response)

    def patch(self, document_id: str) -> Patch:
        return Patch(self, document_id)

    def delete(self, document_id: str) -> Dict[str, Any]:
        return self.mutate([{"delete": {"id": document_id}}])
