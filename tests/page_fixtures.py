"""
Synthetic YouTube pages and renderer nodes shared by the tests.

The shapes follow what youtube.com currently embeds, trimmed to the
fields the scraper reads.
"""

import json


def embed(marker: str, payload) -> str:
    return f'<script nonce="x">{marker}{json.dumps(payload)};</script>'


def html_page(initial_data=None, player_response=None, data_marker="var ytInitialData = ",
              player_marker="var ytInitialPlayerResponse = ") -> str:
    parts = ["<!DOCTYPE html><html><head><title>YouTube</title></head><body>",
             '<script>var ytcfg = {"set": function(){ if (a) { b(); } }};</script>']
    if player_response is not None:
        parts.append(embed(player_marker, player_response))
    if initial_data is not None:
        parts.append(embed(data_marker, initial_data))
    parts.append("</body></html>")
    return "\n".join(parts)


def thumbs(*widths):
    return {"thumbnails": [
        {"url": f"https://i.ytimg.com/vi/x/{w}.jpg", "width": w, "height": w * 9 // 16}
        for w in widths
    ]}


def owner_runs(name, browse_id=None, path=None):
    endpoint = {}
    if browse_id or path:
        endpoint["browseEndpoint"] = {}
        if browse_id:
            endpoint["browseEndpoint"]["browseId"] = browse_id
        if path:
            endpoint["browseEndpoint"]["canonicalBaseUrl"] = path
    run = {"text": name}
    if endpoint:
        run["navigationEndpoint"] = endpoint
    return {"runs": [run]}


def video_renderer(video_id, title="A video", views="1 234 vues", badges=None, owner=None):
    node = {
        "videoId": video_id,
        "thumbnail": thumbs(120, 360),
        "title": {"runs": [{"text": title}]},
        "descriptionSnippet": {"runs": [{"text": "Some "}, {"text": "description"}]},
        "ownerText": owner if owner is not None else owner_runs("Chan", "UCchan", "/@chan"),
        "publishedTimeText": {"simpleText": "il y a 2 jours"},
        "lengthText": {"simpleText": "3:45"},
        "viewCountText": {"simpleText": views},
    }
    if badges:
        node["badges"] = [{"metadataBadgeRenderer": {"label": b}} for b in badges]
    return node


def playlist_renderer(list_id, title="A playlist", count="12"):
    return {
        "playlistId": list_id,
        "title": {"simpleText": title},
        "thumbnails": [thumbs(168, 336)],
        "videoCount": count,
        "shortBylineText": owner_runs("Chan", "UCchan"),
    }


def channel_renderer(channel_id, title="A channel"):
    return {
        "channelId": channel_id,
        "title": {"simpleText": title},
        "thumbnail": {"thumbnails": [{"url": "//yt3.ggpht.com/a=s88", "width": 88, "height": 88},
                                     {"url": "//yt3.ggpht.com/a=s176", "width": 176, "height": 176}]},
        "descriptionSnippet": {"runs": [{"text": "About"}]},
        "subscriberCountText": {"simpleText": "1,2 M d'abonnés"},
        "videoCountText": {"runs": [{"text": "1 024"}, {"text": " vidéos"}]},
    }


def search_initial_data(videos=(), playlists=(), channels=(), estimated="5000"):
    contents = []
    for v in videos:
        contents.append({"videoRenderer": v})
    for p in playlists:
        contents.append({"playlistRenderer": p})
    for c in channels:
        contents.append({"channelRenderer": c})
    return {
        "estimatedResults": estimated,
        "contents": {
            "twoColumnSearchResultsRenderer": {
                "primaryContents": {
                    "sectionListRenderer": {
                        "contents": [{"itemSectionRenderer": {"contents": contents}}]
                    }
                }
            }
        },
    }
