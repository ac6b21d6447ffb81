import collections

import pytest

from dkmeans.base.data_structures import Message, Phase
from dkmeans.base.errors import ProtocolError
from dkmeans.distributed import MPIChannel


class LoopbackComm:
    """Minimal stand-in for an MPI communicator seen from one rank."""

    def __init__(self, rank, size):
        self.rank = rank
        self.size = size
        self.sent = []
        self.inbox = collections.defaultdict(collections.deque)
        self.tags = []

    def Get_rank(self):
        return self.rank

    def Get_size(self):
        return self.size

    def send(self, obj, dest, tag):
        self.sent.append((obj, dest, tag))

    def recv(self, source, tag=None):
        self.tags.append(tag)
        return self.inbox[source].popleft()


def test_phase_is_the_tag():
    comm = LoopbackComm(0, 3)
    channel = MPIChannel(comm)
    channel.send(Message(phase=Phase.STOP, round=4, payload=True), 2)
    (obj, dest, tag), = comm.sent
    assert dest == 2
    assert tag == Phase.STOP.value
    assert channel.rank == 0 and channel.size == 3


def test_out_of_order_envelope_is_reported():
    comm = LoopbackComm(1, 2)
    comm.inbox[0].append(Message(phase=Phase.STOP, round=1, payload=False))
    channel = MPIChannel(comm)
    with pytest.raises(ProtocolError):
        channel.recv(0, Phase.BROADCAST)


def test_receive_accepts_any_tag():
    comm = LoopbackComm(0, 2)
    comm.inbox[1].append(Message(phase=Phase.VOTE, round=2, payload=True))
    channel = MPIChannel(comm)
    message = channel.recv(1, Phase.VOTE)
    assert message.round == 2 and message.payload is True
    # no tag filter, so a mismatched phase surfaces as ProtocolError
    assert comm.tags == [None]
