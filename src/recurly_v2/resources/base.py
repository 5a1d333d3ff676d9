"""Base de recursos.

Por qué Pydantic para los recursos:
- Cada clase declara sus campos de forma explícita y Pydantic hace la
  (de)serialización tipada; no hay dispatch dinámico de atributos.
- Encima de eso añadimos lo que el modelo no trae: URI de origen, campos
  modificados desde la última carga y los verbos CRUD contra la API.

Ciclo de vida:
- Se crea en memoria -> `save()` hace POST y rellena los campos del servidor ->
  `save()`/`reload()`/`destroy()` posteriores hablan con su URI.
- No hay persistencia local: el servidor es la única fuente de verdad.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, ClassVar, Iterator, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from recurly_v2.adapters.http_client import ApiClient
from recurly_v2.core.domain.models import HREF_KEY, Link
from recurly_v2.core.domain.money import Money
from recurly_v2.core.errors import (
    ImmutableAttributeError,
    InvalidResourceError,
    NotFoundError,
    UnexpectedStatusError,
    ValidationError,
)

if TYPE_CHECKING:
    from recurly_v2.resources.pager import Pager

R = TypeVar("R", bound="Resource")

IMMUTABLE_FIELDS = frozenset({"id", "uuid", "href", "links"})
ALWAYS_READ_ONLY = frozenset({"href", "links", "id", "uuid", "created_at", "updated_at"})

_BY_NODENAME: dict[str, type[Resource]] = {}
_BY_CLASS_NAME: dict[str, type[Resource]] = {}


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def resource_class(name: str) -> type[Resource]:
    """Clase de recurso por nombre de clase (`"Plan"`) o nombre de nodo (`"plan"`)."""

    try:
        return _BY_CLASS_NAME[name]
    except KeyError:
        pass
    try:
        return _BY_NODENAME[name]
    except KeyError:
        raise LookupError(f"Unknown resource {name!r}") from None


def _payload_value(value: Any) -> Any:
    if isinstance(value, Resource):
        return value.to_payload(changed_only=not value.persisted)
    if isinstance(value, Money):
        return dict(value.root)
    if isinstance(value, BaseModel) and hasattr(value, "to_payload"):
        return value.to_payload()
    if isinstance(value, (list, tuple)):
        return [_payload_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _payload_value(item) for key, item in value.items()}
    return value


class Resource(BaseModel):
    """A server-side billing entity reachable through CRUD-style HTTP verbs.

    Subclasses declare:

    - ``nodename``: root element name on the wire (defaults to the snake_case class name).
    - ``collection_path``: path under ``/v2/`` (``None`` for resources that only live
      nested inside others).
    - ``identifier``: field used to build the member URI (``uuid`` by default).
    - ``embedded``: the resource cannot be fetched or saved on its own.
    - ``read_only``: fields the server owns and that are never sent.
    - ``has_many`` / ``has_one``: relation name -> resource class name.
    - ``sensitive``: fields redacted from request logs.
    """

    model_config = ConfigDict(
        extra="ignore",
        validate_assignment=True,
        populate_by_name=True,
    )

    nodename: ClassVar[str] = "resource"
    collection_path: ClassVar[str | None] = None
    identifier: ClassVar[str] = "uuid"
    embedded: ClassVar[bool] = False
    read_only: ClassVar[frozenset[str]] = frozenset()
    has_many: ClassVar[dict[str, str]] = {}
    has_one: ClassVar[dict[str, str]] = {}
    sensitive: ClassVar[frozenset[str]] = frozenset()

    href: str | None = Field(default=None, exclude=True, repr=False)
    links: dict[str, Link] = Field(default_factory=dict, exclude=True, repr=False)

    _changed: set[str] = PrivateAttr(default_factory=set)
    _persisted: bool = PrivateAttr(default=False)
    _destroyed: bool = PrivateAttr(default=False)
    _errors: dict[str, list[str]] = PrivateAttr(default_factory=dict)
    _client: ApiClient | None = PrivateAttr(default=None)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if "nodename" not in cls.__dict__:
            cls.nodename = _snake_case(cls.__name__)
        _BY_NODENAME.setdefault(cls.nodename, cls)
        _BY_CLASS_NAME[cls.__name__] = cls

    @model_validator(mode="before")
    @classmethod
    def _collect_links(cls, data: Any) -> Any:
        # Referencias (`<account href=.../>`) y anchors de acción no son campos.
        if not isinstance(data, dict):
            return data
        if HREF_KEY not in data and not any(isinstance(v, Link) for v in data.values()):
            return data
        data = dict(data)
        href = data.pop(HREF_KEY, None)
        links = dict(data.get("links") or {})
        for key in [k for k, v in data.items() if isinstance(v, Link)]:
            links[key] = data.pop(key)
        if href:
            data["href"] = href
        data["links"] = links
        return data

    def model_post_init(self, __context: Any) -> None:
        self._changed = set(self.model_fields_set) - {"href", "links"}

    def __setattr__(self, name: str, value: Any) -> None:
        if name in type(self).model_fields:
            if name in IMMUTABLE_FIELDS:
                raise ImmutableAttributeError(f"{type(self).__name__}.{name} is read-only")
            if name == self.identifier and self._persisted:
                raise ImmutableAttributeError(
                    f"{type(self).__name__}.{name} cannot change once the record is persisted"
                )
            super().__setattr__(name, value)
            self._changed.add(name)
            return
        super().__setattr__(name, value)

    # -- state ---------------------------------------------------------------

    @property
    def persisted(self) -> bool:
        return self._persisted and not self._destroyed

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def errors(self) -> dict[str, list[str]]:
        return self._errors

    @property
    def valid(self) -> bool:
        return not self._errors

    @property
    def changed(self) -> bool:
        return bool(self._changed)

    @property
    def changed_attributes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in type(self).model_fields if name in self._changed}

    @property
    def uri(self) -> str | None:
        """Origen del recurso: el `href` del servidor o la ruta convencional."""

        if self.href:
            return self.href
        ident = getattr(self, self.identifier, None)
        if self.collection_path and ident:
            return self.member_path(ident)
        return None

    # -- wire ----------------------------------------------------------------

    def to_payload(self, *, changed_only: bool = True) -> dict[str, Any]:
        names = self._changed if changed_only else self.model_fields_set
        skip = ALWAYS_READ_ONLY | self.read_only
        return {
            name: _payload_value(getattr(self, name))
            for name in type(self).model_fields
            if name in names and name not in skip
        }

    @classmethod
    def from_payload(cls: type[R], payload: dict[str, Any], *, client: ApiClient | None = None) -> R:
        record = cls.model_validate(payload)
        record._mark_loaded(client)
        return record

    @classmethod
    def from_response(cls: type[R], response: httpx.Response, client: ApiClient) -> R:
        _, value = client.decode(response)
        if not isinstance(value, dict):
            raise UnexpectedStatusError(
                f"Expected a {cls.nodename} document in the response",
                status=response.status_code,
                body=response.content,
            )
        return cls.from_payload(value, client=client)

    def _mark_loaded(self, client: ApiClient | None) -> None:
        self._persisted = True
        self._changed = set()
        self._errors = {}
        if client is not None:
            self._client = client
        for name in type(self).model_fields:
            value = self.__dict__.get(name)
            nested = value if isinstance(value, list) else [value]
            for item in nested:
                if isinstance(item, Resource):
                    item._mark_loaded(client)

    def _replace_state(self, fresh: Resource, client: ApiClient | None) -> None:
        # El servidor es la fuente de verdad: se salta validate_assignment y la
        # inmutabilidad de identificadores.
        self.__dict__.update(fresh.__dict__)
        object.__setattr__(self, "__pydantic_fields_set__", set(fresh.model_fields_set))
        self._mark_loaded(client)

    def _reload_from(self, response: httpx.Response, client: ApiClient) -> None:
        if response.content:
            _, value = client.decode(response)
            if isinstance(value, dict):
                self._replace_state(type(self).model_validate(value), client)
                return
        location = response.headers.get("location")
        if location:
            self.__dict__["href"] = location
        self._mark_loaded(client)

    # -- class-level verbs ---------------------------------------------------

    @classmethod
    def member_path(cls, identifier: Any) -> str:
        return f"{cls.collection_path}/{quote(str(identifier), safe='')}"

    @classmethod
    def _require_standalone(cls, operation: str) -> None:
        if cls.embedded or not cls.collection_path:
            raise NotImplementedError(f"{cls.__name__} is embedded; {operation} is not supported")

    def _resolve_client(self, client: ApiClient | None) -> ApiClient:
        return client or self._client or ApiClient()

    @classmethod
    def find(cls: type[R], identifier: Any, *, client: ApiClient | None = None, **params: Any) -> R:
        """GET del miembro. Nunca devuelve `None`: un id vacío o un 404 lanzan `NotFoundError`."""

        cls._require_standalone("find")
        if identifier is None or not str(identifier).strip():
            raise NotFoundError(f"can't find a {cls.__name__} with a blank {cls.identifier}")
        api = client or ApiClient()
        response = api.get(cls.member_path(identifier), **params)
        return cls.from_response(response, api)

    @classmethod
    def paginate(cls: type[R], *, client: ApiClient | None = None, **params: Any) -> Pager[R]:
        from recurly_v2.resources.pager import Pager

        cls._require_standalone("paginate")
        return Pager(cls, cls.collection_path or "", params, client)

    @classmethod
    def all(cls: type[R], *, client: ApiClient | None = None, **params: Any) -> Pager[R]:
        return cls.paginate(client=client, **params)

    @classmethod
    def find_each(cls: type[R], per_page: int = 50, *, client: ApiClient | None = None, **params: Any) -> Iterator[R]:
        yield from cls.paginate(client=client, per_page=per_page, **params)

    @classmethod
    def count(cls, *, client: ApiClient | None = None, **params: Any) -> int:
        return cls.paginate(client=client, **params).count()

    @classmethod
    def first(cls: type[R], *, client: ApiClient | None = None, **params: Any) -> R | None:
        return cls.paginate(client=client, **params).first()

    @classmethod
    def create(cls: type[R], *, client: ApiClient | None = None, **attributes: Any) -> R:
        """Instancia y guarda. Si el servidor rechaza campos, el registro vuelve con `errors`."""

        record = cls(**attributes)
        record.save(client=client)
        return record

    @classmethod
    def create_strict(cls: type[R], *, client: ApiClient | None = None, **attributes: Any) -> R:
        record = cls(**attributes)
        record.save_strict(client=client)
        return record

    # -- instance verbs ------------------------------------------------------

    def _create_path(self) -> str:
        if not self.collection_path:
            raise NotImplementedError(f"{type(self).__name__} is created through its parent resource")
        return self.collection_path

    def _require_saveable(self, operation: str) -> None:
        if self.embedded:
            raise NotImplementedError(f"{type(self).__name__} is embedded; {operation} is not supported")

    def save(self, *, client: ApiClient | None = None) -> bool:
        """POST si es nuevo, PUT de los campos modificados si ya existe.

        Devuelve `False` (con `errors` rellenado) cuando el servidor responde 422.
        """

        self._require_saveable("save")
        api = self._resolve_client(client)
        self._errors = {}
        try:
            if self.persisted:
                response = api.put(self._require_uri("save"), self)
            else:
                response = api.post(self._create_path(), self)
        except ValidationError as exc:
            self._apply_errors(exc)
            return False
        self._reload_from(response, api)
        return True

    def save_strict(self, *, client: ApiClient | None = None) -> bool:
        if not self.save(client=client):
            raise InvalidResourceError(self)
        return True

    def _create_nested(self, child: Resource, name: str, *, client: ApiClient | None = None) -> bool:
        """POST de `child` a la colección anidada `<uri>/<name>` (p.ej. ajustes de una cuenta)."""

        api = self._resolve_client(client)
        child._errors = {}
        try:
            response = api.post(f"{self._require_uri(name)}/{name}", child)
        except ValidationError as exc:
            child._apply_errors(exc)
            return False
        child._reload_from(response, api)
        return True

    def destroy(self, *, client: ApiClient | None = None) -> bool:
        self._require_saveable("destroy")
        api = self._resolve_client(client)
        api.delete(self._require_uri("destroy"))
        self._destroyed = True
        return True

    def reload(self: R, response: httpx.Response | None = None, *, client: ApiClient | None = None) -> R:
        """Refresca desde `response` (si trae cuerpo) o con un GET a su URI."""

        api = self._resolve_client(client)
        if response is None or not response.content:
            response = api.get(self._require_uri("reload"))
        self._reload_from(response, api)
        return self

    def related(self, name: str, *, client: ApiClient | None = None, **params: Any) -> Any:
        """Resuelve una relación `has_many` (iterable) o `has_one` (recurso).

        Usa los datos embebidos si vinieron en la respuesta; si no, sigue el
        enlace del servidor o la ruta anidada `<uri>/<name>`.
        """

        relations = {**self.has_many, **self.has_one}
        if name not in relations:
            raise AttributeError(f"{type(self).__name__} has no relation {name!r}")
        target = resource_class(relations[name])

        if name in type(self).model_fields and not params:
            value = getattr(self, name)
            if value is not None:
                return value

        api = self._resolve_client(client)
        link = self.links.get(name)
        path = link.href if link else f"{self._require_uri(name)}/{name}"
        if name in self.has_many:
            from recurly_v2.resources.pager import Pager

            return Pager(target, path, params, api)
        return target.from_response(api.get(path, **params), api)

    def _action(
        self: R,
        method: str,
        action: str,
        *,
        body: Any = None,
        client: ApiClient | None = None,
        **params: Any,
    ) -> R:
        api = self._resolve_client(client)
        link = self.links.get(action)
        if link is not None:
            path, method = link.href, link.method or method
        else:
            path = f"{self._require_uri(action)}/{action}"
        response = api.request(method, path, body=body, params=params)
        return self.reload(response, client=api)

    def _require_uri(self, operation: str) -> str:
        uri = self.uri
        if uri is None:
            raise NotFoundError(f"{type(self).__name__} has no URI; cannot {operation}")
        return uri

    def _apply_errors(self, exc: ValidationError) -> None:
        prefix = f"{self.nodename}."
        for field, messages in exc.errors.items():
            key = field[len(prefix):] if field.startswith(prefix) else field
            self._errors.setdefault(key, []).extend(messages)
        if not exc.errors:
            self._errors["base"] = [exc.description or str(exc)]
