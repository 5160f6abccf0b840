from models import Vote

from .keys import vote_key


class VoteDbMixin:
    """公众投票存储操作 mixin，键唯一性保证每人每作品只能投一票"""

    def create_vote(self, vote):
        """写入投票记录，已投过时返回 False"""
        return self.store.set_if_absent(vote_key(vote.entry_id, vote.voter_id), vote.to_dict())

    def get_vote(self, entry_id, voter_id):
        data = self.store.get(vote_key(entry_id, voter_id))
        return Vote.from_dict(data) if data else None

    def has_voted(self, entry_id, voter_id):
        return self.get_vote(entry_id, voter_id) is not None
