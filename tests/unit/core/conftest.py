"""Shared fixtures for core unit tests"""

import pytest

from mdblog.core.models import BlurbState, ListState, Metadata, MetadataReadState


SAMPLE_MD = """\
```
title: Sample Post
publishDate: 2024-01-01
```

# Sample Post

An opening paragraph with **bold** text.

## Shopping

- eggs
- milk

1. first
2. second

> Quoted "wisdom".

![A cat](images/cat.png)

``print(1)``
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_file")
def sample_file_fixture(tmp_path):
    f = tmp_path / "sample-post.md"
    f.write_text(SAMPLE_MD, encoding="utf-8")
    return f


@pytest.fixture(name="empty_meta")
def empty_meta_fixture():
    return Metadata(), MetadataReadState.not_started, BlurbState.not_started


@pytest.fixture(name="closed")
def closed_fixture():
    return ListState.not_started, ListState.not_started
