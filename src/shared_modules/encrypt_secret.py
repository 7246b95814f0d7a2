# Hilfsskript zum Verschlüsseln von Secrets (APP_PASSWORD, FLASK_SECRET_KEY) für .env
# Ausführen: timeplan-encrypt <NAME> [klartext]
import getpass
import os
import sys
from typing import List, Optional

from cryptography.fernet import Fernet


def encrypt(value: str, fernet_key: str) -> str:
    return Fernet(fernet_key.encode()).encrypt(value.encode()).decode()


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Aufruf: timeplan-encrypt <NAME> [klartext]")
        return 1
    name = args[0]
    if len(args) >= 2:
        value = args[1]
    else:
        # Interaktive Abfrage, falls kein Wert übergeben wurde
        value = getpass.getpass(f"Bitte Wert für {name} eingeben (wird nicht angezeigt): ")
        if not value:
            print("Kein Wert eingegeben. Abbruch.")
            return 1

    fernet_key = os.getenv("FERNET_KEY")
    if not fernet_key:
        fernet_key = Fernet.generate_key().decode()
        print("Kein FERNET_KEY in der Umgebung gefunden. Ein neuer Schlüssel wurde generiert:")
        print(f"FERNET_KEY={fernet_key}")

    print(f"{name}_ENC={encrypt(value, fernet_key)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
