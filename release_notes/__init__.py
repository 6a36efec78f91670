'''
Release Notes Tools

Creates the release-notes of Scalar products.

`create-release-note` creates the release-note of a single repository. It collects the merged
pull requests tracked by the GitHub project of the release, extracts the release-note text from
the `## Release notes` section of each pull request body, groups them by the category derived
from the pull request labels, and merges pull requests declared to be the "same as" another one.

`merge-release-notes` merges the release-notes of ScalarDB (community edition) and of
ScalarDB Cluster, ScalarDB GraphQL and ScalarDB SQL (enterprise edition) into a single document.
'''
