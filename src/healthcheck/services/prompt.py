from __future__ import annotations

import json
from typing import Dict, List

from ..schemas.inputs import HealthCheckInputs
from ..schemas.report import Evaluation, MaturityLevel

PHASES = ("Stabilizzazione", "Ottimizzazione", "Automazione")


def build_messages(inputs: HealthCheckInputs) -> List[Dict[str, str]]:
    """Build the chat messages asking the model for a health check report."""

    payload = json.dumps(inputs.to_wire(), indent=2, ensure_ascii=False)
    levels = ", ".join(f'"{level.value}"' for level in MaturityLevel)
    evaluations = ", ".join(f'"{e.value}"' for e in Evaluation)
    phases = ", ".join(PHASES)

    system_prompt = """Sei HealthCheck-Engineer, un esperto consulente CMMS specializzato in mainsim.
Valuti lo stato di salute dell'uso del CMMS di un cliente a partire dai suoi KPI di manutenzione.
Rispondi SOLO con JSON conforme allo schema richiesto, senza commenti."""

    user_prompt = f"""Analizza i seguenti dati di input forniti da un cliente.
I valori null indicano metriche che il cliente non conosce: stimale in base agli standard di settore e segnalalo nelle note.

DATI DI INPUT:
{payload}

Regole per il report:
1. Tono: professionale, consulenziale, diretto.
2. Analisi KPI: per ogni metrica fornisci un punteggio da 1 a 5 e una valutazione tra {evaluations}, con note critiche.
3. Maturità: calcola un punteggio complessivo da 0 a 100 e un livello tra {levels}.
4. Raccomandazioni: consigli pratici e specifici per migliorare l'uso di mainsim, ordinati per priorità.
5. Quick win: azioni a basso sforzo realizzabili subito.
6. Strategia: piano in tre fasi a 30/60/90 giorni ({phases}), nell'ordine.

Sii critico sui backlog elevati, sulla bassa percentuale di manutenzione preventiva e sulla scarsa qualità dei dati."""

    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
