"""Infrastructure layer - external systems integration.

- discord/: bot, cogs, guards and the member/voice adapters
- audio/: yt-dlp resolver
- http/: Discord status page client
- memory/: in-process session repository
"""
