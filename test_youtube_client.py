import unittest
from datetime import datetime, timedelta, timezone

import youtube_client
from day_data import VideoData, decode_meta

NOW = datetime(2020, 3, 10, 12, 0, tzinfo=timezone.utc)


class FakeRequest:
    def __init__(self, result):
        self.result = result

    def execute(self):
        return self.result


class FakeResource:
    """Records calls and replies with canned responses, in order."""

    def __init__(self, responses=None):
        self.calls = []
        self.responses = list(responses or [])

    def _reply(self, name, kwargs):
        self.calls.append((name, kwargs))
        if self.responses:
            return FakeRequest(self.responses.pop(0))
        return FakeRequest({"id": "new", **(kwargs.get("body") or {})})

    def list(self, **kwargs):
        return self._reply("list", kwargs)

    def insert(self, **kwargs):
        return self._reply("insert", kwargs)

    def update(self, **kwargs):
        return self._reply("update", kwargs)


class FakeYouTube:
    def __init__(self, search=None, videos=None, playlist_items=None):
        self._search = FakeResource(search)
        self._videos = FakeResource(videos)
        self._playlist_items = FakeResource(playlist_items)

    def search(self):
        return self._search

    def videos(self):
        return self._videos

    def playlistItems(self):
        return self._playlist_items


def rendered_day(**kwargs):
    item = VideoData(expedition="ght", type="day", key=7, has_video=True,
                     full_title="Title", full_description="Description\n",
                     full_title_usa="Title US", full_description_usa="Description US\n")
    for k, v in kwargs.items():
        setattr(item, k, v)
    return item


class ExtractMetaTests(unittest.TestCase):
    def test_meta_tag_in_description(self):
        item = rendered_day()
        video = {"id": "v", "snippet": {"description": f"Hello\n\n{youtube_client.meta_tag(item)}"}}
        self.assertEqual(youtube_client.extract_meta(video), item.meta())

    def test_videos_without_meta(self):
        self.assertIsNone(youtube_client.extract_meta({"id": "v", "snippet": {"description": "hi"}}))
        self.assertIsNone(youtube_client.extract_meta({"id": "v", "snippet": {"description": "[meta:!!]"}}))

    def test_broken_legacy_meta_aborts(self):
        video = {"id": "v", "snippet": {}, "localizations": {
            "eo": {"title": "youtube-tool-meta-data", "description": "{oops"},
        }}
        with self.assertRaises(ValueError):
            youtube_client.extract_meta(video)


class VideoBodyTests(unittest.TestCase):
    def test_new_video_is_private_and_scheduled(self):
        item = rendered_day(live_time=NOW + timedelta(days=2))
        body = youtube_client.build_video_body(item, None, now=NOW)

        self.assertNotIn("id", body)
        self.assertEqual(body["snippet"]["title"], "Title")
        self.assertEqual(body["snippet"]["categoryId"], "19")
        self.assertEqual(body["snippet"]["defaultLanguage"], "en-GB")
        self.assertEqual(body["status"], {"privacyStatus": "private", "publishAt": "2020-03-12T12:00:00Z"})

        tag = youtube_client.META_TAG_RE.search(body["snippet"]["description"]).group(1)
        self.assertEqual(decode_meta(tag), item.meta())
        self.assertTrue(body["snippet"]["description"].startswith("Description\n\n[meta:"))

        usa = body["localizations"]["en-US"]
        self.assertEqual(usa["title"], "Title US")
        self.assertIn("[meta:", usa["description"])

    def test_existing_video_keeps_status_and_drops_legacy_meta(self):
        item = rendered_day(live_time=NOW - timedelta(days=2))
        video = {
            "id": "abc",
            "status": {"privacyStatus": "public", "uploadStatus": "processed", "embeddable": True},
            "localizations": {
                "eo": {"title": "youtube-tool-meta-data", "description": "{}"},
                "de": {"title": "Titel", "description": "Beschreibung"},
            },
        }
        body = youtube_client.build_video_body(item, video, now=NOW)

        self.assertEqual(body["id"], "abc")
        self.assertEqual(body["status"], {"privacyStatus": "public", "embeddable": True})
        self.assertEqual(sorted(body["localizations"]), ["de", "en-US"])

    def test_existing_tags_survive_an_update(self):
        video = {"id": "abc", "snippet": {"title": "Old", "tags": ["nepal", "trekking"]}}
        body = youtube_client.build_video_body(rendered_day(), video, now=NOW)
        self.assertEqual(body["snippet"]["tags"], ["nepal", "trekking"])
        self.assertNotIn("tags", youtube_client.build_video_body(rendered_day(), None, now=NOW)["snippet"])

    def test_current_video_is_recognised(self):
        item = rendered_day(live_time=NOW - timedelta(days=2))
        body = youtube_client.build_video_body(item, None, now=NOW)
        item.video = {"id": "abc", "snippet": dict(body["snippet"]), "localizations": body["localizations"]}
        self.assertTrue(youtube_client.video_is_current(item))

        item.full_title_usa = "Changed"
        self.assertFalse(youtube_client.video_is_current(item))

    def test_title_is_truncated_to_youtube_limit(self):
        body = youtube_client.build_video_body(rendered_day(full_title="x" * 150), None, now=NOW)
        self.assertEqual(len(body["snippet"]["title"]), 100)


class ChannelListingTests(unittest.TestCase):
    def test_list_my_videos_follows_search_pages(self):
        service = FakeYouTube(
            search=[
                {"items": [{"id": {"videoId": "a"}}, {"id": {"videoId": "b"}}], "nextPageToken": "p2"},
                {"items": [{"id": {"videoId": "c"}}]},
            ],
            videos=[
                {"items": [{"id": "a"}, {"id": "b"}]},
                {"items": [{"id": "c"}]},
            ],
        )
        videos = youtube_client.list_my_videos(service)
        self.assertEqual([v["id"] for v in videos], ["a", "b", "c"])
        self.assertEqual(service._search.calls[1][1]["pageToken"], "p2")
        self.assertEqual(service._videos.calls[0][1]["id"], "a,b")

    def test_update_video_sends_parts_from_body(self):
        service = FakeYouTube(videos=[{"id": "abc"}])
        body = {"id": "abc", "snippet": {"title": "t"}, "status": {}}
        youtube_client.update_video(service, body)
        name, kwargs = service._videos.calls[0]
        self.assertEqual(name, "update")
        self.assertEqual(kwargs["part"], "snippet,status")


class PlaylistTests(unittest.TestCase):
    def test_missing_video_is_inserted_at_position(self):
        service = FakeYouTube()
        item = rendered_day(video={"id": "v7"}, position=6)
        youtube_client.ensure_playlist_position(service, "PL1", item)
        name, kwargs = service._playlist_items.calls[0]
        self.assertEqual(name, "insert")
        self.assertEqual(kwargs["body"]["snippet"]["position"], 6)
        self.assertEqual(kwargs["body"]["snippet"]["resourceId"]["videoId"], "v7")
        self.assertIsNotNone(item.playlist_item)

    def test_misplaced_video_is_moved(self):
        service = FakeYouTube()
        item = rendered_day(video={"id": "v7"}, position=6,
                            playlist_item={"id": "pi", "snippet": {"position": 2}})
        youtube_client.ensure_playlist_position(service, "PL1", item)
        name, kwargs = service._playlist_items.calls[0]
        self.assertEqual(name, "update")
        self.assertEqual(kwargs["body"]["id"], "pi")

    def test_correct_position_is_left_alone(self):
        service = FakeYouTube()
        item = rendered_day(video={"id": "v7"}, position=6,
                            playlist_item={"id": "pi", "snippet": {"position": 6}})
        youtube_client.ensure_playlist_position(service, "PL1", item)
        self.assertEqual(service._playlist_items.calls, [])

    def test_no_playlist_configured(self):
        item = rendered_day(video={"id": "v7"})
        self.assertIsNone(youtube_client.ensure_playlist_position(FakeYouTube(), "", item))


if __name__ == "__main__":
    unittest.main()
