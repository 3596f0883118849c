from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from testgen.core.exceptions import AnalysisError, InvalidInputError
from testgen.schemas.testcase import Endpoint, ExampleResponse


logger = logging.getLogger(__name__)

ANALYSIS_ERROR_PREFIX = "Failed to analyze Postman collection"

Variables = Dict[str, str]


def _text(value: Any) -> str:
    """Scalar JSON value as text; only a missing value becomes empty."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _variables_from(node: Dict[str, Any]) -> Variables:
    variables: Variables = {}
    raw = node.get("variable")
    if not isinstance(raw, list):
        return variables
    for var in raw:
        if not isinstance(var, dict):
            continue
        key = str(var.get("key") or "")
        if key:
            variables[key] = _text(var.get("value"))
    return variables


def _enabled_pairs(items: Any) -> List[Dict[str, Any]]:
    """Key/value entries (headers, query, form params) that are not disabled."""
    if not isinstance(items, list):
        return []
    return [
        item
        for item in items
        if isinstance(item, dict) and item.get("key") and not item.get("disabled", False)
    ]


class CollectionAnalyzer:
    """
    Turns Postman v2 collection JSON into an ordered list of endpoints.

    Requests are emitted depth-first in document order, so folder
    structure never changes the order test cases are generated in.
    """

    def analyze(self, raw_json: Optional[str]) -> List[Endpoint]:
        if raw_json is None or not raw_json.strip():
            raise InvalidInputError("Collection JSON cannot be null or empty")

        logger.info("Analyzing Postman collection from JSON (%s chars)", len(raw_json))
        try:
            root = json.loads(raw_json)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise AnalysisError(ANALYSIS_ERROR_PREFIX, exc) from exc
        return self.analyze_data(root)

    def analyze_data(self, root: Any) -> List[Endpoint]:
        """Analyze an already decoded collection object."""
        if root is None:
            raise InvalidInputError("Collection cannot be null")
        if not isinstance(root, dict):
            raise AnalysisError(
                ANALYSIS_ERROR_PREFIX,
                ValueError(f"expected a JSON object, got {type(root).__name__}"),
            )

        info = root.get("info") if isinstance(root.get("info"), dict) else {}
        schema = info.get("schema")
        if schema is not None and "v2" not in str(schema):
            raise AnalysisError(
                ANALYSIS_ERROR_PREFIX,
                ValueError(f"unsupported collection schema {schema!r}; only v2.x is supported"),
            )
        collection_name = str(info.get("name") or "Unnamed Collection")

        endpoints: List[Endpoint] = []
        items = root.get("item")
        if items is None:
            logger.warning("No items found in collection %r", collection_name)
            return endpoints

        try:
            self._parse_items(
                items,
                endpoints,
                parent_path="",
                collection_name=collection_name,
                collection_vars=_variables_from(root),
                folder_vars={},
            )
        except RecursionError as exc:
            raise AnalysisError(
                ANALYSIS_ERROR_PREFIX,
                ValueError("folders are nested too deeply"),
            ) from exc
        logger.info(
            "Collection %r analyzed: %s endpoints",
            collection_name,
            len(endpoints),
        )
        return endpoints

    def analyze_file(self, path: str | Path) -> List[Endpoint]:
        """Read a collection file and analyze its contents."""
        if not path or not str(path).strip():
            raise InvalidInputError("Collection file path cannot be null or empty")
        try:
            raw_json = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise AnalysisError(ANALYSIS_ERROR_PREFIX, exc) from exc
        return self.analyze(raw_json)

    def _parse_items(
        self,
        items: Any,
        endpoints: List[Endpoint],
        parent_path: str,
        collection_name: str,
        collection_vars: Variables,
        folder_vars: Variables,
    ) -> None:
        if not isinstance(items, list):
            raise AnalysisError(
                ANALYSIS_ERROR_PREFIX,
                ValueError(f"'item' must be an array, got {type(items).__name__}"),
            )

        for item in items:
            if not isinstance(item, dict):
                logger.warning("Skipping non-object collection item: %r", item)
                continue

            if "item" in item:
                folder_name = str(item.get("name") or "Unnamed Folder")
                path = f"{parent_path}/{folder_name}" if parent_path else folder_name
                self._parse_items(
                    item["item"],
                    endpoints,
                    parent_path=path,
                    collection_name=collection_name,
                    collection_vars=collection_vars,
                    folder_vars={**folder_vars, **_variables_from(item)},
                )
                continue

            endpoint = self._parse_request(
                item, parent_path, collection_name, collection_vars, folder_vars
            )
            if endpoint is not None:
                endpoints.append(endpoint)

    def _parse_request(
        self,
        item: Dict[str, Any],
        folder_path: str,
        collection_name: str,
        collection_vars: Variables,
        folder_vars: Variables,
    ) -> Optional[Endpoint]:
        name = str(item.get("name") or "Unnamed Request")
        request = item.get("request")
        if not isinstance(request, dict):
            logger.warning("Request item %r has no 'request' object; skipping", name)
            return None

        def resolve(value: str) -> str:
            return self.process_variables(value, collection_vars, folder_vars)

        url, host, path, query_params = self._parse_url(request.get("url"))

        headers = {
            str(h["key"]): resolve(_text(h.get("value")))
            for h in _enabled_pairs(request.get("header"))
        }

        body, body_type, form_data = self._parse_body(request.get("body"))

        description = ""
        raw_description = request.get("description")
        if isinstance(raw_description, str):
            description = raw_description
        elif isinstance(raw_description, dict) and isinstance(raw_description.get("content"), str):
            description = raw_description["content"]

        return Endpoint(
            name=name,
            url=resolve(url),
            method=str(request.get("method") or "GET"),
            path=resolve(path),
            host=resolve(host),
            query_params={k: resolve(v) for k, v in query_params.items()},
            headers=headers,
            request_body=resolve(body),
            request_body_type=body_type,
            form_data={k: resolve(v) for k, v in form_data.items()},
            folder_path=folder_path,
            collection_name=collection_name,
            description=description,
            example_responses=self._parse_responses(item.get("response")),
            test_script=self._parse_test_script(item.get("event")),
        )

    @staticmethod
    def _parse_url(url_node: Any) -> tuple[str, str, str, Dict[str, str]]:
        """Return (url, host, path, query params) for a string or object URL."""
        if isinstance(url_node, str):
            return url_node, "", "", {}
        if not isinstance(url_node, dict):
            return "", "", "", {}

        url = str(url_node.get("raw") or "")
        host = ""
        path = ""

        host_parts = url_node.get("host")
        if isinstance(host_parts, list):
            protocol = url_node.get("protocol")
            prefix = f"{protocol}://" if protocol else ""
            host = prefix + ".".join(str(p) for p in host_parts)

        path_parts = url_node.get("path")
        if isinstance(path_parts, list):
            path = "".join(f"/{p}" for p in path_parts)

        query_params = {
            str(q["key"]): _text(q.get("value"))
            for q in _enabled_pairs(url_node.get("query"))
        }

        if host and path:
            url = host + path
        return url, host, path, query_params

    @staticmethod
    def _parse_body(body_node: Any) -> tuple[str, str, Dict[str, str]]:
        """Return (body text, body type, form fields) for a request body."""
        if not isinstance(body_node, dict):
            return "", "", {}

        mode = body_node.get("mode") or ""
        if mode == "raw":
            body = str(body_node.get("raw") or "")
            body_type = "raw"
            options = body_node.get("options")
            language = ""
            if isinstance(options, dict) and isinstance(options.get("raw"), dict):
                language = str(options["raw"].get("language") or "")
            if language:
                body_type = language.lower()
            elif body.strip().startswith(("{", "[")):
                body_type = "json"
            return body, body_type, {}

        if mode in ("urlencoded", "formdata"):
            form_data = {
                str(p["key"]): _text(p.get("value"))
                for p in _enabled_pairs(body_node.get(mode))
            }
            return "", mode, form_data

        return "", "", {}

    @staticmethod
    def _parse_responses(responses: Any) -> List[ExampleResponse]:
        if not isinstance(responses, list):
            return []
        examples: List[ExampleResponse] = []
        for response in responses:
            if not isinstance(response, dict):
                continue
            code = response.get("code")
            examples.append(
                ExampleResponse(
                    name=str(response.get("name") or "Example Response"),
                    code=code if isinstance(code, int) else 200,
                    body=str(response.get("body") or ""),
                )
            )
        return examples

    @staticmethod
    def _parse_test_script(events: Any) -> str:
        if not isinstance(events, list):
            return ""
        script = ""
        for event in events:
            if not isinstance(event, dict) or event.get("listen") != "test":
                continue
            source = event.get("script")
            exec_node = source.get("exec") if isinstance(source, dict) else None
            if isinstance(exec_node, list):
                script = "".join(f"{line}\n" for line in exec_node)
            elif isinstance(exec_node, str):
                script = exec_node
        return script

    @staticmethod
    def process_variables(
        value: str,
        collection_vars: Variables,
        folder_vars: Variables,
    ) -> str:
        """Replace ``{{name}}`` references; folder variables take precedence."""
        if not value:
            return value
        result = value
        for variables in (folder_vars, collection_vars):
            for key, replacement in variables.items():
                result = result.replace("{{" + key + "}}", replacement)
        return result
