''' Broadcast network of machines with a NAT side channel '''

import logging as lg
from dataclasses import dataclass
from typing import Sequence

from intcode.common.conf import MachineSettings, NETWORK_SIZE, NAT_ADDRESS, IDLE_INPUT
from intcode.runtime.machine import Machine


class RoutingError(Exception):
    pass


class NetworkHalted(Exception):
    pass


@dataclass(frozen=True)
class Packet:
    destination: int
    x: int
    y: int


class Node:
    address: int
    machine: Machine
    buffer: list[int]   # Outputs not yet forming a whole packet

    def __init__(self, address: int, machine: Machine):
        self.address = address
        self.machine = machine
        self.buffer = []
        machine.register_input(address)

    def receive(self, packet: Packet):
        self.machine.register_inputs((packet.x, packet.y))

    @property
    def idle(self) -> bool:
        return not self.machine.inputs

    def poll(self) -> list[Packet]:
        ''' Runs the node until it blocks or halts '''
        if self.machine.halted:
            return []

        if not self.machine.inputs:
            self.machine.register_input(IDLE_INPUT)

        self.buffer.extend(self.machine.run())
        packets = []

        while len(self.buffer) >= 3:
            (destination, x, y) = self.buffer[:3]
            del self.buffer[:3]
            packets.append(Packet(destination, x, y))

        return packets


class Network:
    nodes: list[Node]
    nat: list[Packet]   # Diverted packets, most recent last
    wakes: list[Packet]   # Packets the NAT delivered to node 0

    def __init__(
        self,
        program: Sequence[int],
        size: int = NETWORK_SIZE,
        nat_address: int = NAT_ADDRESS,
        idle_threshold: int = 1,
        settings: MachineSettings | None = None
    ):
        if nat_address < size:
            raise UserWarning(f'NAT address {nat_address} collides with a node')

        self.nodes = [Node(i, Machine(program, settings=settings)) for i in range(size)]
        self.nat_address = nat_address
        self.idle_threshold = idle_threshold
        self.idle_rounds = 0
        self.nat = []
        self.wakes = []

    def route(self, source: int, packet: Packet):
        if packet.destination == self.nat_address:
            lg.debug(f'NAT <- {source}: {packet.x},{packet.y}')
            self.nat.append(packet)
            return

        if not 0 <= packet.destination < len(self.nodes):
            raise RoutingError(f'Node {source} sent to unknown address {packet.destination}')

        self.nodes[packet.destination].receive(packet)

    def wake(self):
        if not self.nat:
            raise RoutingError('Network idle with nothing held by the NAT')

        latest = self.nat[-1]
        lg.debug(f'NAT -> 0: {latest.x},{latest.y}')
        self.nodes[0].receive(latest)
        self.wakes.append(latest)
        self.idle_rounds = 0

    def run_round(self) -> list[Packet]:
        ''' One pass over every node; the NAT fires once the idle threshold is reached '''
        sent = []

        for node in self.nodes:
            for packet in node.poll():
                self.route(node.address, packet)
                sent.append(packet)

        if all(node.machine.halted for node in self.nodes):
            raise NetworkHalted('Every node has halted')

        if not sent and all(node.idle for node in self.nodes):
            self.idle_rounds += 1

            # Nothing to replay until some node has talked to the NAT
            if self.idle_rounds >= self.idle_threshold and self.nat:
                self.wake()
        else:
            self.idle_rounds = 0

        return sent

    def first_nat_packet(self) -> Packet:
        while not self.nat:
            self.run_round()

        return self.nat[0]

    def run_until_repeated_wake(self) -> int:
        '''
        First y the NAT delivers to node 0 twice in a row.

        Only consecutive wakes are compared; a y repeated after a different
        wake in between does not stop the run.
        '''
        while True:
            seen = len(self.wakes)
            self.run_round()

            if len(self.wakes) > seen and len(self.wakes) >= 2 \
                    and self.wakes[-1].y == self.wakes[-2].y:
                return self.wakes[-1].y
