from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Mess
from .serializers import (
    MessSerializer,
    MessCreateSerializer,
    MessMemberSerializer,
    JoinMessSerializer,
    AddMemberSerializer,
    RemoveMemberSerializer,
    UpdateMemberSerializer,
)
from .permissions import IsMessMember, UUID_LOOKUP_REGEX

from apps.messes.services import (
    create_mess,
    join_mess,
    add_member,
    update_member,
    remove_member,
    leave_mess,
    get_mess_members,
    get_user_messes,
    get_mess_by_id,
    # Exceptions
    MessNotFoundError,
    MessNameTakenError,
    InvalidMessPasswordError,
    AlreadyMemberError,
    DuplicateMemberError,
    NotMemberError,
    ManagerCannotLeaveError,
    CannotRemoveSelfError,
    InsufficientPermissionsError,
    LinkedEmailChangeError,
)


class MessViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for messes.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Messes the user belongs to
    create: Create a new mess (creator becomes manager)
    retrieve: Get a specific mess
    """

    serializer_class = MessSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_queryset(self):
        """Return only messes where user is on the roster."""
        return get_user_messes(user=self.request.user)

    def get_permissions(self):
        if self.action in ['retrieve', 'members', 'leave', 'update_member', 'remove_member']:
            return [IsAuthenticated(), IsMessMember()]
        return [IsAuthenticated()]

    @extend_schema(request=MessCreateSerializer, responses={201: MessSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new mess."""
        serializer = MessCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            mess = create_mess(
                name=serializer.validated_data['name'],
                password=serializer.validated_data['password'],
                creator=request.user,
            )
        except MessNameTakenError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = MessSerializer(mess, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        """Get a mess with its roster prefetched."""
        try:
            mess = get_mess_by_id(mess_id=pk)
        except MessNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(MessSerializer(mess, context={'request': request}).data)

    @extend_schema(request=AddMemberSerializer, responses={200: MessMemberSerializer(many=True)})
    @action(detail=True, methods=['get', 'post'])
    def members(self, request, pk=None):
        """List the roster, or add a roster entry (manager only)."""
        if request.method == 'GET':
            memberships = get_mess_members(mess_id=pk)
            serializer = MessMemberSerializer(memberships, many=True)
            return Response(serializer.data)

        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            member = add_member(
                mess_id=pk,
                name=serializer.validated_data['name'],
                email=serializer.validated_data['email'],
                added_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except DuplicateMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(MessMemberSerializer(member).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a mess."""
        try:
            leave_mess(mess_id=pk, user=request.user)
        except (ManagerCannotLeaveError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=UpdateMemberSerializer, responses={200: MessMemberSerializer})
    @action(detail=True, methods=['patch'])
    def update_member(self, request, pk=None):
        """Rename a roster entry or fix its email (manager only)."""
        serializer = UpdateMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            member = update_member(
                mess_id=pk,
                member_id=data['member_id'],
                updated_by=request.user,
                name=data.get('name'),
                email=data.get('email'),
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateMemberError, LinkedEmailChangeError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(MessMemberSerializer(member).data)

    @extend_schema(request=RemoveMemberSerializer, responses={204: None})
    @action(detail=True, methods=['post'])
    def remove_member(self, request, pk=None):
        """Remove a roster entry (manager only)."""
        serializer = RemoveMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            remove_member(
                mess_id=pk,
                member_id=serializer.validated_data['member_id'],
                removed_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CannotRemoveSelfError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=JoinMessSerializer,
    responses={201: MessMemberSerializer},
    description="Join a mess by its name and password.",
    tags=['messes'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def join(request):
    """Join a mess by name and password."""
    serializer = JoinMessSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        member = join_mess(
            name=serializer.validated_data['name'],
            password=serializer.validated_data['password'],
            user=request.user,
        )
    except MessNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (InvalidMessPasswordError, AlreadyMemberError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(MessMemberSerializer(member).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: MessSerializer(many=True)},
    description="Get all messes where the current user is a member.",
    tags=['messes'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_messes(request):
    """Get all messes where user is a member."""
    messes = get_user_messes(user=request.user)
    serializer = MessSerializer(messes, many=True, context={'request': request})
    return Response(serializer.data)
