# Issue Template Bot - Package
#
# This package contains the 5-stage pipeline that checks a newly opened,
# reopened or edited GitHub Issue or Pull Request against the repository's
# template and keeps a single bot comment on it up to date.
#
# The pipeline is orchestrated by issue_bot_main.py and runs inside a GitHub
# Actions runner. It reads the event payload (issue / PR body), and writes
# back exactly one comment per run (create or update).
#
# Stage flow:
#   1. Read Event -> 2. Classify Template -> 3. Validate Compliance
#   -> 4. Compose Message -> 5. Sync Comment
