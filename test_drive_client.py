import unittest

import drive_client


class FakeFiles:
    def __init__(self, pages):
        self.pages = list(pages)
        self.calls = []

    def list(self, **kwargs):
        self.calls.append(kwargs)
        page = self.pages.pop(0)

        class _Request:
            def execute(self):
                return page

        return _Request()


class FakeDrive:
    def __init__(self, pages):
        self._files = FakeFiles(pages)

    def files(self):
        return self._files


class ListFilesTests(unittest.TestCase):
    def test_follows_page_tokens(self):
        service = FakeDrive([
            {"files": [{"id": "1", "name": "D001.mp4"}], "nextPageToken": "next"},
            {"files": [{"id": "2", "name": "D002.mp4"}]},
        ])
        files = drive_client.list_files_in_folder(service, "folder123")

        self.assertEqual([f["id"] for f in files], ["1", "2"])
        calls = service.files().calls
        self.assertEqual(calls[0]["q"], "'folder123' in parents")
        self.assertIsNone(calls[0]["pageToken"])
        self.assertEqual(calls[1]["pageToken"], "next")

    def test_folder_must_be_configured(self):
        with self.assertRaises(RuntimeError):
            drive_client.list_files_in_folder(FakeDrive([]), "")


class IndexFilesTests(unittest.TestCase):
    def test_index_by_day(self):
        files = [{"id": "a", "name": "D010 Ghunsa.mp4"}, {"id": "b", "name": "D002.mp4"}]
        by_day = drive_client.index_files_by_day(files)
        self.assertEqual(sorted(by_day), [2, 10])
        self.assertEqual(by_day[10]["id"], "a")

    def test_strict_mode_rejects_unknown_names(self):
        files = [{"id": "a", "name": "cover.jpg"}]
        with self.assertRaises(ValueError):
            drive_client.index_files_by_day(files, strict=True)
        self.assertEqual(drive_client.index_files_by_day(files, strict=False), {})

    def test_duplicate_days_are_rejected(self):
        files = [{"id": "a", "name": "D001.mp4"}, {"id": "b", "name": "D001-v2.mp4"}]
        with self.assertRaises(ValueError):
            drive_client.index_files_by_day(files)


if __name__ == "__main__":
    unittest.main()
