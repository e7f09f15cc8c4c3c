#!/usr/bin/env python3
"""
Simula el atajo de iOS: genera un dia de muestras de heart rate y steps
con el formato del export (strings separados por \\n) y lo manda al servicio.
note: el servidor tiene que estar corriendo (python main.py)
"""
import argparse
import os
import random
import sys
import time
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List

import requests

# Agregar el directorio raiz al PYTHONPATH para encontrar el modulo 'health_api'
script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(script_dir)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from health_api.config import AUTH_HEADER, BASE_URL, INGEST_PATH


def generate_block(day: date, count: int, low: int, high: int, every_minutes: int, zero_ratio: float = 0.0) -> Dict[str, str]:
    """Genera un RawSample {values, timestamps} con lecturas cada `every_minutes`."""
    start = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    values: List[str] = []
    timestamps: List[str] = []
    for i in range(count):
        ts = start + timedelta(minutes=i * every_minutes)
        value = 0 if random.random() < zero_ratio else random.randint(low, high)
        values.append(str(value))
        timestamps.append(ts.isoformat())
    return {"values": "\n".join(values), "timestamps": "\n".join(timestamps)}


def generate_payload(day: date, heart_count: int, steps_count: int) -> Dict:
    return {
        "heart": generate_block(day, heart_count, 50, 160, every_minutes=5),
        "steps": generate_block(day, steps_count, 0, 1500, every_minutes=60, zero_ratio=0.3),
        "date": day.isoformat(),
    }


def send_payload(payload: Dict, key: str) -> tuple:
    """Envía el payload y retorna (status_code, response_time, body)."""
    start_time = time.time()
    response = requests.post(
        f"{BASE_URL}{INGEST_PATH}",
        json=payload,
        headers={AUTH_HEADER: key},
        timeout=30
    )
    response_time = time.time() - start_time
    try:
        body = response.json()
    except ValueError:
        body = response.text
    return (response.status_code, response_time, body)


def main():
    parser = argparse.ArgumentParser(description="Envía un export de salud simulado")
    parser.add_argument("--date", default=date.today().isoformat(), help="Fecha del dispositivo (YYYY-MM-DD)")
    parser.add_argument("--heart", type=int, default=288, help="Cantidad de lecturas de heart rate")
    parser.add_argument("--steps", type=int, default=24, help="Cantidad de lecturas de steps")
    parser.add_argument("--key", default=os.getenv("API_KEY", ""), help="Valor del header x-key")
    parser.add_argument("--check-validation", action="store_true", help="Probar metodo y auth invalidos")
    args = parser.parse_args()

    day = date.fromisoformat(args.date)
    payload = generate_payload(day, args.heart, args.steps)

    print(f"\n🚀 Enviando export del {day} a {BASE_URL}{INGEST_PATH}...")
    try:
        status, resp_time, body = send_payload(payload, args.key)
    except requests.RequestException as e:
        print(f"❌ Error de conexion: {e}")
        sys.exit(1)

    icon = "✅" if status == 200 else "❌"
    print(f"{icon} Status {status} - {resp_time:.3f}s")
    print(f"   {body}")

    if args.check_validation:
        print("\n🧪 Probando validaciones...")
        response = requests.get(f"{BASE_URL}{INGEST_PATH}", timeout=10)
        print(f"   GET -> {response.status_code} (esperado: 400)")
        response = requests.post(f"{BASE_URL}{INGEST_PATH}", json=payload, headers={AUTH_HEADER: "wrong"}, timeout=10)
        print(f"   x-key incorrecta -> {response.status_code} (esperado: 403)")

    if status != 200:
        sys.exit(1)


if __name__ == "__main__":
    main()
