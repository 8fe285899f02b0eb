"""A dev entrypoint for printing a few IDs."""

import os

from idworker import create_worker

worker = create_worker(os.getenv("ENV", "development"))

if __name__ == "__main__":
    for _ in range(int(os.getenv("COUNT", "5"))):
        snowflake_id = worker.next_id()
        print(snowflake_id, worker.parse(snowflake_id))
