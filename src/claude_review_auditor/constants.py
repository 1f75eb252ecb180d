"""
監査ポリシーの定数を一元管理する。
"""

WORKFLOWS_DIR = ".github/workflows"

BLOCKING_REVIEW_WORKFLOW = "claude-blocking-review.yml"
CLAUDE_ACTION = "anthropics/claude-code-action"

ASSISTANT_TRIGGERS = ("issue_comment", "pull_request_review", "issues:")
INTERACTIVE_TRIGGERS = ("issue_comment", "pull_request_review")
PULL_REQUEST_TRIGGER = "pull_request"

TARGET_SECRET = "CLAUDE_CODE_OAUTH_TOKEN"
SECRET_PASSING_KEY = "claude_oauth_token"

REQUIRED_CHECK_KEYWORD = "claude"

DEFAULT_REPO_LIMIT = 300

KIND_USER = "User"
KIND_ORGANIZATION = "Organization"
OWNER_KINDS = (KIND_USER, KIND_ORGANIZATION)

DEFAULT_OWNERS = (
    ("smartwatermelon", KIND_USER),
    ("nightowlstudiollc", KIND_ORGANIZATION),
)

CATEGORY_BLOCKING_REVIEW = "blocking-review"
CATEGORY_ASSISTANT = "assistant"
CATEGORY_CODE_REVIEW = "code-review"

AUTH_STATUS_PLACEHOLDER = "see gh auth status"
