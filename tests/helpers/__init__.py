"""Test helper modules for the depfetch test suite.

- manifests: write repository.yml files from plain dicts
- fetchers: RecordingFetcher / FakeGit doubles for the fetch layer
- git_helpers: real git repositories for integration tests
- cache_utils: reset module-level caches between tests
"""
