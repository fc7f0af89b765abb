"""Core crawler logic – concurrent BFS crawler and image storage."""

from readme_crawler.core.crawler import Crawler
from readme_crawler.core.storage import ImageStore, content_hash, image_filename

__all__ = ["Crawler", "ImageStore", "content_hash", "image_filename"]
