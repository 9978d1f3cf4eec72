from pymongo import MongoClient
from video_api.core.config import settings


def dump(db, col_name: str):
    idx = list(db[col_name].list_indexes())
    print(f"\nIndexes in '{col_name}':")
    for i in idx:
        print(" -", i)


if __name__ == "__main__":
    database = MongoClient(settings.mongo_dsn)[settings.mongo_db]
    dump(database, "users")
    dump(database, "videos")
