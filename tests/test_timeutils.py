from datetime import datetime, timedelta, timezone
import unittest

from timeadjust.timeutils import format_moment, parse_moment, resolve_timezone


class TimeUtilsTest(unittest.TestCase):
    def test_parse_moment_zulu(self) -> None:
        self.assertEqual(
            parse_moment("2021-01-01T00:00:00Z"),
            datetime(2021, 1, 1, tzinfo=timezone.utc),
        )

    def test_parse_moment_attaches_timezone_to_naive(self) -> None:
        plus_three = timezone(timedelta(hours=3))
        parsed = parse_moment("2021-01-01T10:00", tz=plus_three)
        self.assertEqual(parsed.tzinfo, plus_three)
        self.assertEqual(parsed.hour, 10)

    def test_parse_moment_keeps_explicit_offset(self) -> None:
        parsed = parse_moment("2021-01-01T10:00:00+01:00", tz=timezone.utc)
        self.assertEqual(parsed.utcoffset(), timedelta(hours=1))

    def test_parse_moment_now_and_today(self) -> None:
        fixed = datetime(2021, 5, 6, 15, 30, 12)
        self.assertIs(parse_moment("now", now=fixed), fixed)
        self.assertEqual(parse_moment(" Today ", now=fixed), datetime(2021, 5, 6))

    def test_parse_moment_rejects_other_text(self) -> None:
        with self.assertRaises(ValueError):
            parse_moment("yesterday")

    def test_format_moment_iso_uses_z(self) -> None:
        moment = datetime(2021, 1, 2, 1, 1, 1, tzinfo=timezone.utc)
        self.assertEqual(format_moment(moment), "2021-01-02T01:01:01Z")

    def test_format_moment_strftime(self) -> None:
        self.assertEqual(format_moment(datetime(2021, 1, 2), "%d.%m.%Y"), "02.01.2021")

    def test_resolve_timezone(self) -> None:
        self.assertIsNone(resolve_timezone(""))
        self.assertIs(resolve_timezone("utc"), timezone.utc)
        with self.assertRaises(ValueError):
            resolve_timezone("Not/A_Zone")


if __name__ == "__main__":
    unittest.main()
