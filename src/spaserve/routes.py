"""Client-side routes of the tourism site.

Mirrors the browser router's route tree. Every extensionless path gets
the application shell anyway; this list is the allow-list used in
strict mode and by ``spaserve routes``.
"""

SITE_ROUTES: tuple[str, ...] = (
    "/",
    "/turismo",
    "/cultura",
    "/comunidad",
    "/galeria",
    "/contacto",
    "/perfil",
    "/admin-places",
    "/login",
    "/calendario-cultural",
    "/section-gastronomia",
    "/section-atracciones",
    "/section-cooperativa",
    "/success",
    "/oauth-callback",
)
