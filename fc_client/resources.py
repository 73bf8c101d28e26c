"""
Resource-level helpers (services, functions, triggers, ...) built on `Dispatcher.execute`.

Option mappings are passed through with the service's own camelCase field names.
"""
from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from .dispatcher import Dispatcher
from .models import ResponseEnvelope


Headers = Optional[Mapping[str, str]]
Options = Optional[Mapping[str, Any]]

_STRING_FUNCTION_FIELDS = ("functionName", "runtime", "handler", "initializer")
_INT_FUNCTION_FIELDS = ("memorySize", "timeout", "initializationTimeout")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def get_service_name(service_name: str, qualifier: Optional[str] = None) -> str:
    if qualifier:
        return f"{service_name}.{qualifier}"
    return service_name


def parse_int(value: Any) -> int:
    """
    Parse the leading integer of `value` (``"512MB"`` -> 512, ``"1.5"`` -> 1).

    Raises `ValueError` when `value` does not start with an integer.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    match = _LEADING_INT.match(str(value))
    if match is None:
        raise ValueError(f"Expected an integer value, got {value!r}")
    return int(match.group(1))


def normalize_function_options(options: Options) -> Dict[str, Any]:
    """Return a copy of `options` with string/int fields coerced to their wire types."""
    normalized = dict(options or {})
    for key in _STRING_FUNCTION_FIELDS:
        if normalized.get(key):
            normalized[key] = str(normalized[key])
    for key in _INT_FUNCTION_FIELDS:
        if normalized.get(key):
            normalized[key] = parse_int(normalized[key])
    return normalized


class FCClient(Dispatcher):
    """
    Function compute client exposing one method per API resource operation.
    """

    # -- Services -------------------------------------------------------
    def create_service(self, service_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        body = {"serviceName": service_name, **dict(options or {})}
        return self.post("/services", body, headers)

    def list_services(self, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.get("/services", options, headers)

    def get_service(
        self,
        service_name: str,
        headers: Headers = None,
        qualifier: Optional[str] = None,
    ) -> ResponseEnvelope:
        return self.get(f"/services/{get_service_name(service_name, qualifier)}", None, headers)

    def update_service(self, service_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.put(f"/services/{service_name}", dict(options or {}), headers)

    def delete_service(self, service_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.delete(f"/services/{service_name}", options, headers)

    # -- Functions ------------------------------------------------------
    def create_function(self, service_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.post(f"/services/{service_name}/functions", normalize_function_options(options), headers)

    def list_functions(
        self,
        service_name: str,
        options: Options = None,
        headers: Headers = None,
        qualifier: Optional[str] = None,
    ) -> ResponseEnvelope:
        return self.get(f"/services/{get_service_name(service_name, qualifier)}/functions", options, headers)

    def get_function(
        self,
        service_name: str,
        function_name: str,
        headers: Headers = None,
        qualifier: Optional[str] = None,
    ) -> ResponseEnvelope:
        path = f"/services/{get_service_name(service_name, qualifier)}/functions/{function_name}"
        return self.get(path, None, headers)

    def get_function_code(
        self,
        service_name: str,
        function_name: str,
        headers: Headers = None,
        qualifier: Optional[str] = None,
    ) -> ResponseEnvelope:
        path = f"/services/{get_service_name(service_name, qualifier)}/functions/{function_name}/code"
        return self.get(path, None, headers)

    def update_function(
        self,
        service_name: str,
        function_name: str,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{service_name}/functions/{function_name}"
        return self.put(path, normalize_function_options(options), headers)

    def delete_function(
        self,
        service_name: str,
        function_name: str,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        return self.delete(f"/services/{service_name}/functions/{function_name}", options, headers)

    def invoke_function(
        self,
        service_name: str,
        function_name: str,
        event: Union[str, bytes, None] = None,
        headers: Headers = None,
        qualifier: Optional[str] = None,
        *,
        raw_buf: bool = False,
    ) -> ResponseEnvelope:
        """
        Invoke a function synchronously (or asynchronously via the
        ``x-fc-invocation-type: Async`` header).
        """
        if event and not isinstance(event, (str, bytes, bytearray)):
            raise TypeError('"event" must be str or bytes')

        path = f"/services/{get_service_name(service_name, qualifier)}/functions/{function_name}/invocations"
        return self.post(path, event, headers, None, raw_buf=raw_buf)

    # -- Triggers -------------------------------------------------------
    def create_trigger(
        self,
        service_name: str,
        function_name: str,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{service_name}/functions/{function_name}/triggers"
        return self.post(path, dict(options or {}), headers)

    def list_triggers(
        self,
        service_name: str,
        function_name: str,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        return self.get(f"/services/{service_name}/functions/{function_name}/triggers", options, headers)

    def get_trigger(
        self,
        service_name: str,
        function_name: str,
        trigger_name: str,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{service_name}/functions/{function_name}/triggers/{trigger_name}"
        return self.get(path, None, headers)

    def update_trigger(
        self,
        service_name: str,
        function_name: str,
        trigger_name: str,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{service_name}/functions/{function_name}/triggers/{trigger_name}"
        return self.put(path, dict(options or {}), headers)

    def delete_trigger(
        self,
        service_name: str,
        function_name: str,
        trigger_name: str,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{service_name}/functions/{function_name}/triggers/{trigger_name}"
        return self.delete(path, options, headers)

    # -- Custom domains -------------------------------------------------
    def create_custom_domain(self, domain_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        body = {"domainName": domain_name, **dict(options or {})}
        return self.post("/custom-domains", body, headers)

    def list_custom_domains(self, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.get("/custom-domains", options, headers)

    def get_custom_domain(self, domain_name: str, headers: Headers = None) -> ResponseEnvelope:
        return self.get(f"/custom-domains/{domain_name}", None, headers)

    def update_custom_domain(self, domain_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.put(f"/custom-domains/{domain_name}", dict(options or {}), headers)

    def delete_custom_domain(self, domain_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.delete(f"/custom-domains/{domain_name}", options, headers)

    # -- Versions -------------------------------------------------------
    def publish_version(
        self,
        service_name: str,
        description: Optional[str] = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        body: Dict[str, Any] = {}
        if description:
            body["description"] = description
        return self.post(f"/services/{service_name}/versions", body, headers)

    def list_versions(self, service_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.get(f"/services/{service_name}/versions", options, headers)

    def delete_version(self, service_name: str, version_id: str, headers: Headers = None) -> ResponseEnvelope:
        return self.delete(f"/services/{service_name}/versions/{version_id}", {}, headers)

    # -- Aliases --------------------------------------------------------
    def create_alias(
        self,
        service_name: str,
        alias_name: str,
        version_id: str,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        body = {**dict(options or {}), "aliasName": alias_name, "versionId": version_id}
        return self.post(f"/services/{service_name}/aliases", body, headers)

    def list_aliases(self, service_name: str, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.get(f"/services/{service_name}/aliases", options, headers)

    def get_alias(self, service_name: str, alias_name: str, headers: Headers = None) -> ResponseEnvelope:
        return self.get(f"/services/{service_name}/aliases/{alias_name}", None, headers)

    def update_alias(
        self,
        service_name: str,
        alias_name: str,
        version_id: Optional[str] = None,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        body = dict(options or {})
        if version_id:
            body["versionId"] = version_id
        return self.put(f"/services/{service_name}/aliases/{alias_name}", body, headers)

    def delete_alias(self, service_name: str, alias_name: str, headers: Headers = None) -> ResponseEnvelope:
        return self.delete(f"/services/{service_name}/aliases/{alias_name}", {}, headers)

    # -- Tags -----------------------------------------------------------
    def tag_resource(
        self,
        resource_arn: str,
        tags: Mapping[str, str],
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        body = {**dict(options or {}), "resourceArn": resource_arn, "tags": dict(tags)}
        return self.post("/tag", body, headers)

    def untag_resource(
        self,
        resource_arn: str,
        tag_keys: Iterable[str],
        all_tags: bool = False,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        body = {**dict(options or {}), "resourceArn": resource_arn, "tagKeys": list(tag_keys), "all": all_tags}
        return self.execute("DELETE", "/tag", None, body, headers)

    def get_resource_tags(self, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.get("/tag", options, headers)

    # -- Capacity and provisioning -------------------------------------
    def list_reserved_capacities(self, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.get("/reservedCapacities", options, headers)

    def list_provision_configs(self, options: Options = None, headers: Headers = None) -> ResponseEnvelope:
        return self.get("/provision-configs", options, headers)

    def get_provision_config(
        self,
        service_name: str,
        function_name: str,
        qualifier: Optional[str] = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{get_service_name(service_name, qualifier)}/functions/{function_name}/provision-config"
        return self.get(path, None, headers)

    def put_provision_config(
        self,
        service_name: str,
        function_name: str,
        qualifier: Optional[str] = None,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{get_service_name(service_name, qualifier)}/functions/{function_name}/provision-config"
        return self.put(path, dict(options or {}), headers)

    # -- Async invoke configuration ------------------------------------
    def list_function_async_configs(
        self,
        service_name: str,
        function_name: str,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{service_name}/functions/{function_name}/async-invoke-configs"
        return self.get(path, options, headers)

    def get_function_async_config(
        self,
        service_name: str,
        function_name: str,
        qualifier: Optional[str] = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{get_service_name(service_name, qualifier)}/functions/{function_name}/async-invoke-config"
        return self.get(path, None, headers)

    def put_function_async_config(
        self,
        service_name: str,
        function_name: str,
        qualifier: Optional[str] = None,
        options: Options = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        """
        Options: ``maxAsyncEventAgeInSeconds``, ``maxAsyncRetryAttempts`` and
        ``destinationConfig`` (``onSuccess``/``onFailure`` destinations).
        """
        path = f"/services/{get_service_name(service_name, qualifier)}/functions/{function_name}/async-invoke-config"
        return self.put(path, dict(options or {}), headers)

    def delete_function_async_config(
        self,
        service_name: str,
        function_name: str,
        qualifier: Optional[str] = None,
        headers: Headers = None,
    ) -> ResponseEnvelope:
        path = f"/services/{get_service_name(service_name, qualifier)}/functions/{function_name}/async-invoke-config"
        return self.delete(path, {}, headers)
