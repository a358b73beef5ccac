import unittest

import pandas as pd

from errors import ValidationError
from frames import filter_range, local_day_counts, to_utc_series
from window import day_range, day_range_utc


class ToUtcSeriesTests(unittest.TestCase):
    def test_epoch_seconds(self):
        series = to_utc_series([1700000000])
        self.assertEqual(series.iloc[0], pd.Timestamp("2023-11-14 22:13:20", tz="UTC"))

    def test_epoch_millis(self):
        series = to_utc_series([1700000000000], unit="ms")
        self.assertEqual(series.iloc[0], pd.Timestamp("2023-11-14 22:13:20", tz="UTC"))

    def test_iso_strings_with_offsets(self):
        series = to_utc_series(["2024-03-10T00:00:00-05:00"])
        self.assertEqual(series.iloc[0], pd.Timestamp("2024-03-10 05:00:00", tz="UTC"))

    def test_empty(self):
        self.assertTrue(to_utc_series([]).empty)


class FilterRangeTests(unittest.TestCase):
    def test_keeps_rows_inside_inclusive_bounds(self):
        rng = day_range("America/New_York", "2024-03-10")
        df = pd.DataFrame(
            {
                "ts": [
                    rng.start.seconds - 1,
                    rng.start.seconds,
                    rng.end.seconds,
                    rng.end.seconds + 1,
                ],
                "value": ["before", "first", "last", "after"],
            }
        )

        out = filter_range(df, rng)

        self.assertEqual(out["value"].tolist(), ["first", "last"])

    def test_accepts_utc_range_and_datetime_column(self):
        rng = day_range_utc("Pacific/Auckland", "2024-01-16")
        df = pd.DataFrame(
            {
                "created_at": pd.to_datetime(
                    ["2024-01-15T10:59:59Z", "2024-01-15T11:00:00Z", "2024-01-15T23:00:00Z"], utc=True
                ),
            }
        )

        out = filter_range(df, rng, column="created_at")

        self.assertEqual(len(out), 2)

    def test_empty_frame_passes_through(self):
        out = filter_range(pd.DataFrame(), day_range("UTC", "2024-01-01"))
        self.assertTrue(out.empty)

    def test_missing_column(self):
        with self.assertRaises(ValidationError):
            filter_range(pd.DataFrame({"other": [1]}), day_range("UTC", "2024-01-01"))


class LocalDayCountsTests(unittest.TestCase):
    def test_counts_by_local_day(self):
        df = pd.DataFrame(
            {
                "ts": pd.to_datetime(
                    ["2024-01-15T10:00:00Z", "2024-01-15T11:00:00Z", "2024-01-15T23:00:00Z"], utc=True
                ),
            }
        )

        self.assertEqual(local_day_counts(df, "Pacific/Auckland"), {"2024-01-15": 1, "2024-01-16": 2})
        self.assertEqual(local_day_counts(df, "UTC"), {"2024-01-15": 3})

    def test_fixed_offset_zone(self):
        df = pd.DataFrame({"ts": [1700000000, 1700020000]})

        self.assertEqual(local_day_counts(df, "UTC-5"), {"2023-11-14": 2})

    def test_empty_frame(self):
        self.assertEqual(local_day_counts(pd.DataFrame(), "UTC"), {})


if __name__ == "__main__":
    unittest.main()
