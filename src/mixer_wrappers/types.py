import collections.abc as _cabc

type JsonObject = _cabc.Mapping[str, "Json"]
type JsonArray = _cabc.Sequence["Json"]
type Json = JsonObject | JsonArray | str | int | float | bool | None

# Repeated keys (such as several `fields`) need the pair form.
type QueryParams = _cabc.Mapping[str, str] | _cabc.Sequence[tuple[str, str]]
