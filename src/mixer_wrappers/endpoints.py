import dataclasses as _dc

REQUEST_TIMEOUT_SECONDS = 10

_MIXER_ORIGIN = "https://mixer.com"


@_dc.dataclass(frozen=True)
class Endpoints:
    rest_base_url: str = f"{_MIXER_ORIGIN}/api/v1"
    constellation_url: str = "wss://constellation.mixer.com"
    authorize_url: str = f"{_MIXER_ORIGIN}/oauth/authorize"
    token_url: str = f"{_MIXER_ORIGIN}/api/v1/oauth/token"
    shortcode_url: str = f"{_MIXER_ORIGIN}/api/v1/oauth/shortcode"
    shortcode_check_url: str = f"{_MIXER_ORIGIN}/api/v1/oauth/shortcode/check"

    @classmethod
    def with_base_url(cls, origin: str) -> "Endpoints":
        """
        All HTTP endpoints rooted at `origin`, keeping Mixer's path layout.
        The constellation socket lives at the origin's `/constellation` path.
        """
        origin = origin.rstrip("/")
        if origin.startswith("https://"):
            socket_origin = "wss://" + origin.removeprefix("https://")
        else:
            socket_origin = "ws://" + origin.removeprefix("http://")

        return cls(
            rest_base_url=f"{origin}/api/v1",
            constellation_url=f"{socket_origin}/constellation",
            authorize_url=f"{origin}/oauth/authorize",
            token_url=f"{origin}/api/v1/oauth/token",
            shortcode_url=f"{origin}/api/v1/oauth/shortcode",
            shortcode_check_url=f"{origin}/api/v1/oauth/shortcode/check",
        )
