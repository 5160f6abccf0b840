"""记录存储中的键名约定。"""

ENTRY_INDEX_PREFIX = 'entries:all:'

# 作品提交序号计数器
ENTRY_SEQUENCE_KEY = 'sequence:entries'


def user_phone_key(phone):
    return f"user:phone:{phone}"


def user_id_key(user_id):
    return f"user:id:{user_id}"


def user_entries_prefix(user_id):
    return f"user:{user_id}:entries:"


def user_entry_index_key(user_id, entry_id):
    return f"{user_entries_prefix(user_id)}{entry_id}"


def entry_key(entry_id):
    return f"entry:{entry_id}"


def entry_index_key(entry_id):
    return f"{ENTRY_INDEX_PREFIX}{entry_id}"


def vote_key(entry_id, voter_id):
    return f"vote:{entry_id}:{voter_id}"


def jury_scores_prefix(entry_id):
    return f"jury:{entry_id}:"


def jury_score_key(entry_id, jury_id):
    return f"{jury_scores_prefix(entry_id)}{jury_id}"
