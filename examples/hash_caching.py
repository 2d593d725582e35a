"""Hash caching — compute local digests once, at stat time.

With ``StorageOptions(cache_hashes=True)`` the local backend hashes the file
while describing it, so every later comparison reuses the digest instead of
reading the file again. Remote records (e.g. ``s3://``) always carry the
store's ETag and are never hashed locally.
"""

from __future__ import annotations

import hashlib
import tempfile
from pathlib import Path

from objsync import HashStrategy, ObjectRecord, ObjectURL, StorageOptions, is_composite, resolve_digest, stat

if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "report.csv"
        content = b"region,total\neu,100\nus,200\n"
        path.write_bytes(content)

        plain = stat(path)
        cached = stat(path, StorageOptions(cache_hashes=True))
        print(f"Without cache: digest={plain.digest!r} (computed on first use)")
        print(f"With cache:    digest={cached.digest!r}")
        print(f"resolve_digest(plain) == cached: {resolve_digest(plain) == cached.digest}")

        # A remote record as a listing would report it.
        remote = ObjectRecord(
            url=ObjectURL("s3://bucket/report.csv"),
            size=len(content),
            digest=hashlib.md5(content).hexdigest(),
        )
        print(f"\nHash strategy: {HashStrategy().should_sync(remote, cached).reason}")

        # Multipart uploads report a composite ETag that cannot prove equality.
        multipart = ObjectRecord(url=remote.url, size=remote.size, digest=f"{remote.digest}-3")
        print(f"Composite ETag {multipart.digest!r}: composite={is_composite(multipart.digest)}")
        print(f"Hash strategy: {HashStrategy().should_sync(multipart, cached).reason}")

    print("\nDone!")
