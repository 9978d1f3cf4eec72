"""Recompute videos.likes_count from users.liked_videos membership."""

from pymongo import MongoClient
from video_api.core.config import settings


def main():
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]

    # сколько пользователей держит каждое видео в liked_videos
    pipeline = [
        {"$unwind": "$liked_videos"},
        {"$group": {"_id": "$liked_videos", "count": {"$sum": 1}}},
    ]
    counts = {d["_id"]: d["count"] for d in db["users"].aggregate(pipeline)}

    fixed = 0
    for video in db["videos"].find({}, {"likes_count": 1}):
        expected = counts.get(str(video["_id"]), 0)
        if video.get("likes_count", 0) != expected:
            db["videos"].update_one(
                {"_id": video["_id"]},
                {"$set": {"likes_count": expected}},
            )
            fixed += 1
            print(f"  {video['_id']}: "
                  f"{video.get('likes_count', 0)} -> {expected}")

    print(f"Reconciled {fixed} videos.")


if __name__ == "__main__":
    main()
