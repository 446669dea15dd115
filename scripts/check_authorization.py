#!/usr/bin/env python3
"""Verifica (e opcionalmente solicita) acesso a eventos ou lembretes.

Uso:
    python scripts/check_authorization.py --kind reminder
    python scripts/check_authorization.py --kind event --request --timeout 60

Sai com 0 quando o tipo de entidade termina autorizado e 1 caso contrário.
Padrão: apenas consulta (não exibe prompt do host).
"""

from __future__ import annotations

import argparse
import sys
import threading
from dataclasses import dataclass
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from gateway.bootstrap import build_gateway, initialize_gateway  # noqa: E402
from gateway.domain import AuthorizationClass, AuthorizationStatus, EntityKind  # noqa: E402
from gateway.observability import correlation_scope  # noqa: E402
from gateway.services import AuthorizationGateway  # noqa: E402

GUIDANCE: dict[AuthorizationClass, str] = {
    AuthorizationClass.AUTHORIZED: "Acesso concedido.",
    AuthorizationClass.NOT_DETERMINED: "Acesso ainda não solicitado; use --request.",
    AuthorizationClass.DENIED: "Acesso negado ou restrito; libere em Ajustes > Privacidade.",
}


@dataclass(frozen=True)
class CheckOutcome:
    kind: EntityKind
    initial: AuthorizationStatus
    final: AuthorizationStatus
    requested: bool
    granted: bool | None = None
    error: BaseException | None = None

    @property
    def authorized(self) -> bool:
        return self.final.classify() is AuthorizationClass.AUTHORIZED


def check_authorization(
    gateway: AuthorizationGateway,
    kind: EntityKind,
    *,
    request: bool,
    timeout_seconds: float,
) -> CheckOutcome:
    initial = gateway.authorization_status(kind)
    if not request or initial.classify() is not AuthorizationClass.NOT_DETERMINED:
        return CheckOutcome(kind=kind, initial=initial, final=initial, requested=False)

    done = threading.Event()
    answer: dict[str, object] = {}

    def _on_answer(granted: bool, error: BaseException | None) -> None:
        answer["granted"] = granted
        answer["error"] = error
        done.set()

    gateway.request_authorization(kind, _on_answer)
    if not done.wait(timeout_seconds):
        raise TimeoutError(f"Sem resposta do prompt após {timeout_seconds}s")

    error = answer.get("error")
    return CheckOutcome(
        kind=kind,
        initial=initial,
        final=gateway.authorization_status(kind),
        requested=True,
        granted=bool(answer.get("granted")),
        error=error if isinstance(error, BaseException) else None,
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--kind",
        choices=[kind.name.lower() for kind in EntityKind],
        required=True,
        help="Tipo de entidade a verificar.",
    )
    parser.add_argument(
        "--request",
        action="store_true",
        help="Solicita acesso quando o status ainda não foi determinado.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Segundos de espera pela resposta do prompt.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    initialize_gateway()
    kind = EntityKind[args.kind.upper()]
    with correlation_scope(), build_gateway() as gateway:
        outcome = check_authorization(
            gateway, kind, request=args.request, timeout_seconds=args.timeout
        )

    print(f"Status inicial: {outcome.initial.name}")
    if outcome.requested:
        print(f"Resposta do prompt: granted={outcome.granted} error={outcome.error}")
    print(f"Status final: {outcome.final.name}")
    print(GUIDANCE[outcome.final.classify()])
    sys.exit(0 if outcome.authorized else 1)


if __name__ == "__main__":
    main()
