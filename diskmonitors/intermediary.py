"""Disk scheduler monitor with an intermediary driver process.

User threads ask the monitor for a cylinder; a single driver thread picks
requests in scan order, receives the user's arguments through a one-slot
buffer, performs the transfer and hands the results back the same way.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)

IDLE = -1
NOT_STARTED = -2

REQUESTS: tuple[tuple[int, int], ...] = (
    (1, 98),
    (2, 183),
    (3, 37),
    (4, 122),
    (5, 14),
    (6, 124),
    (7, 65),
    (8, 67),
)

SUCCESS_MESSAGE = "Operacao bem sucedida"


@dataclass(frozen=True)
class TransferArgs:
    """Arguments a user hands to the driver."""

    user_id: int
    data: str = ""


@dataclass(frozen=True)
class TransferResult:
    """Outcome the driver hands back to a user."""

    success: bool
    message: str


class DiskInterface:
    """Monitor between user threads and the disk driver thread.

    The head position is ``NOT_STARTED`` before the driver first runs,
    ``IDLE`` when no request is being served, and otherwise the cylinder
    currently being served.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._position = NOT_STARTED
        self._current = 0
        self._next = 1
        self._queues: tuple[set[int], set[int]] = (set(), set())
        self._scan = (threading.Condition(self._lock), threading.Condition(self._lock))
        self._args_stored = threading.Condition(self._lock)
        self._results_stored = threading.Condition(self._lock)
        self._results_retrieved = threading.Condition(self._lock)
        self._arg_area: TransferArgs | None = None
        self._result_area: TransferResult | None = None
        self._pending_args = 0
        self._pending_results = 0

    @property
    def position(self) -> int:
        """Cylinder under the head, or ``IDLE`` / ``NOT_STARTED``."""
        return self._position

    @property
    def queued(self) -> int:
        """Number of distinct cylinders waiting in both scan queues."""
        with self._lock:
            return sum(len(queue) for queue in self._queues)

    def use_disk(self, cylinder: int, transfer_args: TransferArgs) -> TransferResult:
        """Wait for the head to reach ``cylinder``, pass arguments, return results."""
        user = transfer_args.user_id
        with self._lock:
            logger.debug(
                "[USUÁRIO %d] Tentando acessar cilindro %d. Posição atual do cabeçote: %d",
                user, cylinder, self._position,
            )
            if self._position in (IDLE, NOT_STARTED):
                self._position = cylinder
                logger.debug(
                    "[USUÁRIO %d] Disco estava livre. Assumiu o cilindro %d diretamente.",
                    user, cylinder,
                )
            else:
                direction = self._current if cylinder >= self._position else self._next
                self._queues[direction].add(cylinder)
                logger.debug(
                    "[USUÁRIO %d] Entrou na fila de espera (direção %d) para o cilindro %d. Aguardando...",
                    user, direction, cylinder,
                )
                self._scan[direction].wait_for(lambda: self._position == cylinder)

            logger.debug(
                "[USUÁRIO %d] Acessando cilindro %d. Enviando argumentos.",
                user, self._position,
            )
            self._arg_area = transfer_args
            self._pending_args += 1
            self._args_stored.notify()

            self._results_stored.wait_for(lambda: self._pending_results > 0)
            result = self._result_area
            self._pending_results -= 1
            self._results_retrieved.notify()
            logger.debug("[USUÁRIO %d] Resultados recebidos. Requisição concluída.", user)
            assert result is not None
            return result

    def get_next_request(self) -> TransferArgs:
        """Move the head to the next request in scan order and return its arguments."""
        with self._lock:
            if self._position == NOT_STARTED:
                self._position = IDLE
            logger.debug(
                "[DRIVER]   Pronto para a próxima requisição. Cabeçote na posição: %d",
                self._position,
            )

            if not self._queues[self._current] and self._queues[self._next]:
                logger.debug(
                    "[DRIVER]   Fim da varredura na direção %d. Invertendo para a direção %d.",
                    self._current, self._next,
                )
                self._current, self._next = self._next, self._current

            queue = self._queues[self._current]
            if queue:
                self._position = min(queue)
                queue.discard(self._position)
            else:
                logger.debug("[DRIVER]   Não há requisições. Disco ficará ocioso.")
                self._position = IDLE

            logger.debug(
                "[DRIVER]   Selecionou a próxima requisição. Movendo cabeçote para o cilindro %d.",
                self._position,
            )
            self._scan[self._current].notify_all()

            self._args_stored.wait_for(lambda: self._pending_args > 0)
            transfer_args = self._arg_area
            self._pending_args -= 1
            assert transfer_args is not None
            logger.debug(
                "[DRIVER]   Argumentos recebidos do usuário %d para o cilindro %d.",
                transfer_args.user_id, self._position,
            )
            return transfer_args

    def finished_transfer(self, result: TransferResult) -> None:
        """Publish ``result`` and wait until the user has collected it."""
        with self._lock:
            logger.debug(
                "[DRIVER]   Transferência de dados concluída para o cilindro %d. Enviando resultados.",
                self._position,
            )
            self._result_area = result
            self._pending_results += 1
            self._results_stored.notify()
            self._results_retrieved.wait_for(lambda: self._pending_results == 0)
            logger.debug("[DRIVER]   Usuário confirmou o recebimento dos resultados.")


def user_process(
    user_id: int,
    cylinder: int,
    disk: DiskInterface,
    delay: float | None = None,
) -> TransferResult:
    """Sleep, then request ``cylinder``; the default delay is 0.1 s per user id."""
    time.sleep(0.1 * user_id if delay is None else delay)
    return disk.use_disk(cylinder, TransferArgs(user_id, f"dados do usuario {user_id}"))


def driver_process(
    total_requests: int,
    disk: DiskInterface,
    io_time: float = 0.5,
    idle_time: float = 0.1,
) -> list[tuple[int, int]]:
    """Serve ``total_requests`` requests; return (user id, cylinder) in service order."""
    logger.debug("[DRIVER]   Processo do Driver iniciado.")
    served: list[tuple[int, int]] = []
    while len(served) < total_requests:
        request = disk.get_next_request()
        if request.user_id == -1:
            time.sleep(idle_time)
            continue
        cylinder = disk.position
        logger.debug(
            "[DRIVER]   >>> INICIANDO SERVIÇO para o usuário %d no cilindro %d <<<",
            request.user_id, cylinder,
        )
        time.sleep(io_time)
        logger.debug("[DRIVER]   >>> SERVIÇO CONCLUÍDO para o usuário %d <<<", request.user_id)
        served.append((request.user_id, cylinder))
        disk.finished_transfer(TransferResult(True, SUCCESS_MESSAGE))
    logger.debug(
        "[DRIVER]   Todas as %d requisições foram atendidas. Driver encerrando.",
        total_requests,
    )
    return served


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Disk scheduler simulation with a driver process.")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--debug", dest="debug", action="store_const", const=True, default=None,
                       help="log every step of the monitor")
    group.add_argument("--no-debug", dest="debug", action="store_const", const=False,
                       help="run without step logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the simulation over the fixed request list."""
    options = _parse_args(argv)
    debug = options.debug
    if debug is None:
        answer = input("Deseja ativar o modo de depuracao (transparencia)? (s/n): ").strip()
        debug = answer[:1] in ("s", "S")

    print("\n--- Iniciando a Simulacao do Escalonador de Disco---\n")

    handler: logging.Handler | None = None
    previous_level = logger.level
    if debug:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)

    try:
        disk = DiskInterface()
        driver = threading.Thread(target=driver_process, args=(len(REQUESTS), disk))
        driver.start()
        users = [
            threading.Thread(target=user_process, args=(user_id, cylinder, disk))
            for user_id, cylinder in REQUESTS
        ]
        for user in users:
            user.start()
        for user in users:
            user.join()
        driver.join()
    finally:
        if handler is not None:
            logger.removeHandler(handler)
            logger.setLevel(previous_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())