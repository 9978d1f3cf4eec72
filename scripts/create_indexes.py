from pymongo import MongoClient, ASCENDING, DESCENDING
from video_api.core.config import settings


def main():
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]

    print("Using DSN:", settings.mongo_dsn, "DB:", settings.mongo_db)
    # users: email уникален
    db["users"].create_index(
        [("email", ASCENDING)], unique=True, name="users_email"
    )
    # like toggle считает участников по liked_videos
    db["users"].create_index(
        [("liked_videos", ASCENDING)], name="users_liked_videos"
    )
    db["users"].create_index(
        [("reset_password_token", ASCENDING)],
        sparse=True, name="users_reset_token"
    )

    # videos: ingestion upsert по pexels_id
    db["videos"].create_index(
        [("pexels_id", ASCENDING)], unique=True, name="videos_pexels_id"
    )
    db["videos"].create_index(
        [("created_at", DESCENDING), ("_id", DESCENDING)],
        name="videos_created_desc"
    )
    db["videos"].create_index(
        [("likes_count", DESCENDING), ("_id", DESCENDING)],
        name="videos_likes_desc"
    )

    print("Indexes ensured.")


if __name__ == "__main__":
    main()
