from . import auth, channels, comments, health, me, playlists, relationships, users, videos

ALL_ROUTERS = [
    health.router,
    auth.router,
    users.router,
    channels.router,
    relationships.router,
    me.router,
    videos.router,
    comments.router,
    playlists.router,
]

__all__ = ["ALL_ROUTERS"]
